from portal.extensions import db
from .base import TimestampMixin

PRESCRIPTION_STATUSES = ('active', 'completed', 'cancelled')


class Prescription(db.Model, TimestampMixin):
    """
    Prescription issued alongside a medical record.

    The record link anchors provenance; status moves independently afterwards.
    """

    __tablename__ = 'prescriptions'

    id = db.Column(db.Integer, primary_key=True)
    medical_record_id = db.Column(
        db.Integer, db.ForeignKey('medical_records.id'), nullable=False, index=True
    )
    patient_id = db.Column(db.Integer, db.ForeignKey('patients.id'), nullable=False, index=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey('doctors.id'), nullable=False, index=True)

    medication_name = db.Column(db.String(255), nullable=False)
    dosage = db.Column(db.String(100), nullable=False)  # e.g., "500mg"
    frequency = db.Column(db.String(100), nullable=False)  # e.g., "twice daily"
    duration = db.Column(db.String(100))
    instructions = db.Column(db.Text)

    status = db.Column(db.String(20), default='active', nullable=False)
    prescribed_date = db.Column(db.Date, nullable=False, index=True)

    def __repr__(self):
        return f"<Prescription {self.id} - {self.medication_name}>"
