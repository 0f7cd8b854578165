from datetime import datetime, date
from weightlog import db


class WeightEntry(db.Model):
    """
    A single dated weight measurement owned by a user.

    entry_date is the day the measurement applies to, not the day it was
    recorded. Several entries may share the same entry_date.
    """
    __tablename__ = 'weight_entries'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    # Kilograms
    weight = db.Column(db.Float, nullable=False)

    entry_date = db.Column(db.Date, nullable=False, default=date.today, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=True, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_weight_entries_user_date', 'user_id', 'entry_date'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'weight': self.weight,
            'entry_date': self.entry_date.isoformat() if self.entry_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<WeightEntry {self.id} - User {self.user_id} - {self.entry_date}>'
