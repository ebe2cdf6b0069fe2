from portal.extensions import db
from .base import TimestampMixin

RECORD_TYPES = ('consultation', 'lab_result', 'prescription', 'diagnosis', 'procedure')


class MedicalRecord(db.Model, TimestampMixin):
    __tablename__ = 'medical_records'

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey('patients.id'), nullable=False, index=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey('doctors.id'), nullable=False, index=True)
    appointment_id = db.Column(db.Integer, db.ForeignKey('appointments.id'), nullable=True)

    record_type = db.Column(db.String(20), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    diagnosis = db.Column(db.Text)
    treatment_plan = db.Column(db.Text)
    file_path = db.Column(db.String(500))
    record_date = db.Column(db.Date, nullable=False, index=True)

    def __repr__(self):
        return f"<MedicalRecord {self.id} - {self.record_type}>"
