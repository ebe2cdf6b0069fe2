from datetime import date

from sqlalchemy import Date

from portal.models import Prescription
from portal.query.resources import PRESCRIPTIONS

from .base import Repository


class PrescriptionRepository(Repository):
    spec = PRESCRIPTIONS
    table = 'prescriptions'
    mutable = {
        'medication_name': None,
        'dosage': None,
        'frequency': None,
        'duration': None,
        'instructions': None,
        'status': None,
        'prescribed_date': Date(),
    }

    def create(self, data):
        prescription = Prescription(
            medical_record_id=data['medical_record_id'],
            patient_id=data['patient_id'],
            doctor_id=data['doctor_id'],
            medication_name=data['medication_name'],
            dosage=data['dosage'],
            frequency=data['frequency'],
            duration=data.get('duration'),
            instructions=data.get('instructions'),
            status=data.get('status') or 'active',
            prescribed_date=data.get('prescribed_date') or date.today(),
        )
        return self.find_by_id(self.insert(prescription))
