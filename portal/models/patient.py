from portal.extensions import db
from .base import TimestampMixin


class Patient(db.Model, TimestampMixin):
    __tablename__ = 'patients'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False, index=True)

    # Demographics
    date_of_birth = db.Column(db.Date, nullable=False)
    phone = db.Column(db.String(20))
    address = db.Column(db.Text)
    emergency_contact_name = db.Column(db.String(100))
    emergency_contact_phone = db.Column(db.String(20))

    # Clinical summary
    blood_type = db.Column(db.String(5))
    allergies = db.Column(db.Text)
    medical_conditions = db.Column(db.Text)

    # Insurance
    insurance_provider = db.Column(db.String(100))
    insurance_policy_number = db.Column(db.String(50))

    user = db.relationship('User', backref=db.backref('patient', uselist=False), lazy=True)

    def __repr__(self):
        return f"<Patient {self.id} (user {self.user_id})>"
