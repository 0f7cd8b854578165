# Routes package
from .auth import auth_bp
from .entries import entries_bp
from .profile import profile_bp
from .analytics import analytics_bp

__all__ = ['auth_bp', 'entries_bp', 'profile_bp', 'analytics_bp']
