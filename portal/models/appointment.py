from portal.extensions import db
from .base import TimestampMixin

APPOINTMENT_STATUSES = ('scheduled', 'confirmed', 'completed', 'cancelled', 'no_show')


class Appointment(db.Model, TimestampMixin):
    __tablename__ = 'appointments'

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey('patients.id'), nullable=False, index=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey('doctors.id'), nullable=False, index=True)

    appointment_date = db.Column(db.Date, nullable=False, index=True)
    appointment_time = db.Column(db.String(8), nullable=False)  # "HH:MM:SS"
    duration_minutes = db.Column(db.Integer, default=30, nullable=False)

    # Status: scheduled, confirmed, completed, cancelled, no_show
    status = db.Column(db.String(20), default='scheduled', nullable=False, index=True)
    reason = db.Column(db.Text)
    notes = db.Column(db.Text)

    def __repr__(self):
        return f"<Appointment {self.patient_id} - {self.doctor_id} on {self.appointment_date} {self.appointment_time}>"
