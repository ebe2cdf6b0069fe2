from sqlalchemy import Date, Integer

from portal.models import Appointment
from portal.query import Statement
from portal.query.resources import APPOINTMENTS

from .base import Repository

CANCEL = (
    "UPDATE appointments SET status = 'cancelled', updated_at = CURRENT_TIMESTAMP "
    "WHERE id = :p1 AND status <> 'cancelled'"
)


class AppointmentRepository(Repository):
    spec = APPOINTMENTS
    table = 'appointments'
    mutable = {
        'appointment_date': Date(),
        'appointment_time': None,
        'duration_minutes': Integer(),
        'status': None,
        'reason': None,
        'notes': None,
    }

    def create(self, data):
        appointment = Appointment(
            patient_id=data['patient_id'],
            doctor_id=data['doctor_id'],
            appointment_date=data['appointment_date'],
            appointment_time=data['appointment_time'],
            duration_minutes=data.get('duration_minutes', 30),
            status=data.get('status', 'scheduled'),
            reason=data.get('reason'),
            notes=data.get('notes'),
        )
        return self.find_by_id(self.insert(appointment))

    def cancel(self, key):
        """Set status to cancelled; a second cancel leaves the row untouched."""
        self.write(Statement(CANCEL, {'p1': key}), 'cancelling')
        return self.find_by_id(key)
