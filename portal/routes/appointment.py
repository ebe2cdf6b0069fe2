from datetime import date

from flask import Blueprint, request

from portal.errors import NotFoundError
from portal.query import options_from_args
from portal.repositories import appointments, doctors, patients
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_appointment

appointment_bp = Blueprint('appointment', __name__, url_prefix='/api/appointments')

LIST_FILTERS = {'status': str, 'date_from': date, 'date_to': date}


def _get_or_404(appointment_id):
    appointment = appointments.find_by_id(appointment_id)
    if not appointment:
        raise NotFoundError('Appointment not found.')
    return appointment


def _hint(appointment):
    return ResourceHint(patient_id=appointment['patient_id'], doctor_id=appointment['doctor_id'])


@appointment_bp.route('', methods=['POST'])
@caller_required
def create_appointment(caller):
    """Book an appointment between a patient and an active doctor"""
    data = validate_appointment(request.get_json(silent=True))
    enforce(caller, 'appointment', CREATE, _hint(data))

    if not patients.find_by_id(data['patient_id']):
        raise NotFoundError('Patient not found')
    if not doctors.find_by_id(data['doctor_id']):
        raise NotFoundError('Doctor not found')

    appointment = appointments.create(data)
    return success(appointment, 'Appointment created successfully', 201)


@appointment_bp.route('', methods=['GET'])
@caller_required
def list_appointments(caller):
    """
    List appointments; patients and doctors only ever see their own
    Query params: page or offset, limit, status, doctor_id, patient_id, date_from, date_to
    """
    forced = enforce(caller, 'appointment', LIST)
    options = options_from_args(request.args, {**LIST_FILTERS, 'doctor_id': int, 'patient_id': int})
    return paginated(appointments.find_all(options.with_forced(forced)))


@appointment_bp.route('/patient/<int:patient_id>', methods=['GET'])
@caller_required
def list_patient_appointments(caller, patient_id):
    """Appointments of one patient"""
    forced = enforce(caller, 'appointment', LIST, ResourceHint(patient_id=patient_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(appointments.find_by_owner('patient_id', patient_id, options.with_forced(forced)))


@appointment_bp.route('/doctor/<int:doctor_id>', methods=['GET'])
@caller_required
def list_doctor_appointments(caller, doctor_id):
    """Appointments of one doctor"""
    forced = enforce(caller, 'appointment', LIST, ResourceHint(doctor_id=doctor_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(appointments.find_by_owner('doctor_id', doctor_id, options.with_forced(forced)))


@appointment_bp.route('/<int:appointment_id>', methods=['GET'])
@caller_required
def get_appointment(caller, appointment_id):
    appointment = _get_or_404(appointment_id)
    enforce(caller, 'appointment', READ, _hint(appointment))
    return success(appointment)


@appointment_bp.route('/<int:appointment_id>', methods=['PUT'])
@caller_required
def update_appointment(caller, appointment_id):
    """Reschedule or change status; the participants cannot be changed"""
    appointment = _get_or_404(appointment_id)
    enforce(caller, 'appointment', UPDATE, _hint(appointment))
    data = validate_appointment(request.get_json(silent=True), is_update=True)
    updated = appointments.update(appointment_id, data)
    if not updated:
        raise NotFoundError('Appointment not found.')
    return success(updated, 'Appointment updated successfully')


@appointment_bp.route('/<int:appointment_id>', methods=['DELETE'])
@caller_required
def cancel_appointment(caller, appointment_id):
    """Cancel an appointment; cancelling twice is harmless"""
    appointment = _get_or_404(appointment_id)
    enforce(caller, 'appointment', DELETE, _hint(appointment))
    return success(appointments.cancel(appointment_id), 'Appointment cancelled successfully')
