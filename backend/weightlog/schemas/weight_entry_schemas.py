from datetime import date
import marshmallow as ma


def validate_one_decimal(value: float):
    # Input precision is one decimal place
    if round(value, 1) != value:
        raise ma.ValidationError('Weight can have at most one decimal place')


def validate_not_future(value: date):
    if value > date.today():
        raise ma.ValidationError('Entry date cannot be in the future')


class WeightEntrySchema(ma.Schema):
    """Payload for adding an entry. Range checks happen in EntryValidator."""
    weight = ma.fields.Float(required=True, allow_nan=False, validate=validate_one_decimal)
    entry_date = ma.fields.Date(load_default=date.today, validate=validate_not_future)


class WeightEntryUpdateSchema(ma.Schema):
    weight = ma.fields.Float(allow_nan=False, validate=validate_one_decimal)
    entry_date = ma.fields.Date(validate=validate_not_future)

    @ma.validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ma.ValidationError('Provide weight and/or entry_date to update')
