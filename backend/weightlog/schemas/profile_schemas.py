import marshmallow as ma

from weightlog.services.weight_constants import (
    HEIGHT_MIN_CM,
    HEIGHT_MAX_CM,
    WEIGHT_MIN_KG,
    WEIGHT_MAX_KG,
)


class ProfileUpdateSchema(ma.Schema):
    """
    Partial profile update. Only keys present in the payload are merged;
    an explicit null clears that field.
    """
    height = ma.fields.Float(
        allow_none=True,
        validate=ma.validate.Range(
            min=HEIGHT_MIN_CM, max=HEIGHT_MAX_CM,
            error=f"Height must be between {HEIGHT_MIN_CM} and {HEIGHT_MAX_CM} cm"
        )
    )
    dark_mode = ma.fields.Bool(allow_none=True)
    weight_goal = ma.fields.Float(
        allow_none=True,
        validate=ma.validate.Range(
            min=WEIGHT_MIN_KG, max=WEIGHT_MAX_KG,
            error=f"Goal weight must be between {WEIGHT_MIN_KG} and {WEIGHT_MAX_KG} kg"
        )
    )

    @ma.validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ma.ValidationError('Provide at least one of height, dark_mode, weight_goal')
