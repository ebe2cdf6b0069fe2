from sqlalchemy import Date

from portal.models import Patient
from portal.query import Statement, build_lookup_query
from portal.query.resources import PATIENTS

from .base import Repository

# Deactivates the owning user in one statement so the lookup and the update
# cannot interleave with another writer.
DEACTIVATE_OWNER = (
    'UPDATE users SET is_active = FALSE, updated_at = CURRENT_TIMESTAMP '
    'WHERE id = (SELECT user_id FROM patients WHERE id = :p1)'
)


class PatientRepository(Repository):
    spec = PATIENTS
    table = 'patients'
    mutable = {
        'date_of_birth': Date(),
        'phone': None,
        'address': None,
        'emergency_contact_name': None,
        'emergency_contact_phone': None,
        'blood_type': None,
        'allergies': None,
        'medical_conditions': None,
        'insurance_provider': None,
        'insurance_policy_number': None,
    }

    def create(self, data):
        patient = Patient(user_id=data['user_id'], **{k: data[k] for k in self.mutable if k in data})
        return self.find_by_id(self.insert(patient))

    def find_by_user_id(self, user_id):
        return self.fetch_one(build_lookup_query(self.spec, user_id, column='p.user_id').select(), 'finding')

    def soft_delete(self, key):
        return self.write(Statement(DEACTIVATE_OWNER, {'p1': key}), 'deactivating') > 0
