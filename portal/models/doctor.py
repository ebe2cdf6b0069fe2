from portal.extensions import db
from .base import TimestampMixin


class Doctor(db.Model, TimestampMixin):
    __tablename__ = 'doctors'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False, index=True)

    specialization = db.Column(db.String(100), nullable=False, index=True)
    license_number = db.Column(db.String(20), unique=True, nullable=False)
    phone = db.Column(db.String(20))
    years_experience = db.Column(db.Integer)
    education = db.Column(db.Text)
    consultation_fee = db.Column(db.Numeric(10, 2))

    # Weekly schedule, JSON text at rest (see portal.utils.schedule)
    availability = db.Column(db.Text)
    is_available = db.Column(db.Boolean, default=True, nullable=False)

    user = db.relationship('User', backref=db.backref('doctor', uselist=False), lazy=True)

    def __repr__(self):
        return f"<Doctor {self.id} - {self.specialization}>"
