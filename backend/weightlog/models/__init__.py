from .user import User
from .weight_entry import WeightEntry
from .user_profile import UserProfile

__all__ = ['User', 'WeightEntry', 'UserProfile']
