from datetime import date

from sqlalchemy import Date, Integer

from portal.models import MedicalRecord
from portal.query.resources import MEDICAL_RECORDS

from .base import Repository


class MedicalRecordRepository(Repository):
    spec = MEDICAL_RECORDS
    table = 'medical_records'
    mutable = {
        'record_type': None,
        'title': None,
        'description': None,
        'diagnosis': None,
        'treatment_plan': None,
        'file_path': None,
        'record_date': Date(),
        'appointment_id': Integer(),
    }

    def create(self, data):
        record = MedicalRecord(
            patient_id=data['patient_id'],
            doctor_id=data['doctor_id'],
            **{k: data[k] for k in self.mutable if k in data and k != 'record_date'},
            record_date=data.get('record_date') or date.today(),
        )
        return self.find_by_id(self.insert(record))
