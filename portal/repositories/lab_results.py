from datetime import date

from sqlalchemy import Date

from portal.models import LabResult
from portal.query.resources import LAB_RESULTS

from .base import Repository


class LabResultRepository(Repository):
    spec = LAB_RESULTS
    table = 'lab_results'
    mutable = {
        'test_name': None,
        'test_type': None,
        'result_value': None,
        'reference_range': None,
        'unit': None,
        'status': None,
        'test_date': Date(),
        'lab_technician': None,
        'notes': None,
    }

    def create(self, data):
        result = LabResult(
            medical_record_id=data['medical_record_id'],
            patient_id=data['patient_id'],
            test_name=data['test_name'],
            test_type=data.get('test_type'),
            result_value=data.get('result_value'),
            reference_range=data.get('reference_range'),
            unit=data.get('unit'),
            status=data.get('status') or 'pending',
            test_date=data.get('test_date') or date.today(),
            lab_technician=data.get('lab_technician'),
            notes=data.get('notes'),
        )
        return self.find_by_id(self.insert(result))
