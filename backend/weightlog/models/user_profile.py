from datetime import datetime
from weightlog import db


class UserProfile(db.Model):
    """
    Per-user preferences used by the analytics layer.
    Created on the first profile write, never up front.
    """
    __tablename__ = 'user_profiles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        unique=True
    )

    height = db.Column(db.Float, nullable=True)  # centimeters
    dark_mode = db.Column(db.Boolean, nullable=True)
    weight_goal = db.Column(db.Float, nullable=True)  # kilograms

    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'height': self.height,
            'dark_mode': self.dark_mode,
            'weight_goal': self.weight_goal,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<UserProfile user={self.user_id}>'
