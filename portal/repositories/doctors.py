from dataclasses import replace

from sqlalchemy import Boolean, Integer, Numeric

from portal.models import Doctor
from portal.query import Statement, build_list_query, build_lookup_query
from portal.query.resources import DOCTORS, DOCTORS_BY_SPECIALTY
from portal.utils.schedule import Schedule

from .base import Repository

DEACTIVATE_OWNER = (
    'UPDATE users SET is_active = FALSE, updated_at = CURRENT_TIMESTAMP '
    'WHERE id = (SELECT user_id FROM doctors WHERE id = :p1)'
)


def _store_schedule(data):
    """Serialize a Schedule to its JSON text for the availability column."""
    if isinstance(data.get('availability'), Schedule):
        return {**data, 'availability': data['availability'].to_json()}
    return data


class DoctorRepository(Repository):
    spec = DOCTORS
    table = 'doctors'
    mutable = {
        'specialization': None,
        'license_number': None,
        'phone': None,
        'years_experience': Integer(),
        'education': None,
        'consultation_fee': Numeric(10, 2),
        'availability': None,
        'is_available': Boolean(),
    }

    def _row(self, row):
        data = super()._row(row)
        if data.get('availability'):
            data['availability'] = Schedule.parse(data['availability'])
        return data

    def create(self, data):
        data = _store_schedule(data)
        doctor = Doctor(user_id=data['user_id'], **{k: data[k] for k in self.mutable if k in data})
        return self.find_by_id(self.insert(doctor))

    def update(self, key, patch):
        return super().update(key, _store_schedule(patch))

    def find_by_user_id(self, user_id):
        return self.fetch_one(build_lookup_query(self.spec, user_id, column='d.user_id').select(), 'finding')

    def find_by_specialization(self, specialization, options):
        narrowed = replace(options, filters={'specialization': specialization})
        query = build_list_query(DOCTORS_BY_SPECIALTY, narrowed)
        return self.fetch_page(query, narrowed, 'searching')

    def soft_delete(self, key):
        return self.write(Statement(DEACTIVATE_OWNER, {'p1': key}), 'deactivating') > 0
