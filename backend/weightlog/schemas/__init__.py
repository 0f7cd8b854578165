from .user_schemas import UserRegistrationSchema, UserLoginSchema
from .weight_entry_schemas import WeightEntrySchema, WeightEntryUpdateSchema
from .profile_schemas import ProfileUpdateSchema

__all__ = [
    'UserRegistrationSchema',
    'UserLoginSchema',
    'WeightEntrySchema',
    'WeightEntryUpdateSchema',
    'ProfileUpdateSchema',
]
