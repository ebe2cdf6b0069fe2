from portal.extensions import db
from .base import TimestampMixin

LAB_RESULT_STATUSES = ('pending', 'completed', 'abnormal')


class LabResult(db.Model, TimestampMixin):
    __tablename__ = 'lab_results'

    id = db.Column(db.Integer, primary_key=True)
    medical_record_id = db.Column(
        db.Integer, db.ForeignKey('medical_records.id'), nullable=False, index=True
    )
    patient_id = db.Column(db.Integer, db.ForeignKey('patients.id'), nullable=False, index=True)

    test_name = db.Column(db.String(255), nullable=False)
    test_type = db.Column(db.String(100))
    result_value = db.Column(db.String(255))
    reference_range = db.Column(db.String(100))
    unit = db.Column(db.String(50))

    # Status: pending, completed, abnormal
    status = db.Column(db.String(20), default='pending', nullable=False)
    test_date = db.Column(db.Date, nullable=False, index=True)
    lab_technician = db.Column(db.String(100))
    notes = db.Column(db.Text)

    def __repr__(self):
        return f"<LabResult {self.id} - {self.test_name}>"
