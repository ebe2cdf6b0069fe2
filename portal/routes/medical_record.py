from datetime import date

from flask import Blueprint, request

from portal.errors import NotFoundError, ValidationError
from portal.query import options_from_args
from portal.repositories import appointments, doctors, medical_records, patients
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_medical_record

medical_record_bp = Blueprint('medical_record', __name__, url_prefix='/api/medical-records')

LIST_FILTERS = {'record_type': str, 'date_from': date, 'date_to': date}


def _get_or_404(record_id):
    record = medical_records.find_by_id(record_id)
    if not record:
        raise NotFoundError('Medical record not found.')
    return record


def _hint(record):
    return ResourceHint(patient_id=record['patient_id'], doctor_id=record['doctor_id'])


def _check_appointment(appointment_id, patient_id, doctor_id):
    appointment = appointments.find_by_id(appointment_id)
    if not appointment:
        raise NotFoundError('Appointment not found.')
    if appointment['patient_id'] != patient_id or appointment['doctor_id'] != doctor_id:
        raise ValidationError(errors=['appointment_id must belong to the same patient and doctor'])


@medical_record_bp.route('', methods=['POST'])
@caller_required
def create_medical_record(caller):
    data = validate_medical_record(request.get_json(silent=True))
    enforce(caller, 'medical_record', CREATE, _hint(data))

    if not patients.find_by_id(data['patient_id']):
        raise NotFoundError('Patient not found')
    if not doctors.find_by_id(data['doctor_id']):
        raise NotFoundError('Doctor not found')
    if data.get('appointment_id'):
        _check_appointment(data['appointment_id'], data['patient_id'], data['doctor_id'])

    record = medical_records.create(data)
    return success(record, 'Medical record created successfully', 201)


@medical_record_bp.route('/patient/<int:patient_id>', methods=['GET'])
@caller_required
def list_patient_records(caller, patient_id):
    """
    Medical records of one patient
    Query params: page or offset, limit, record_type, date_from, date_to
    """
    forced = enforce(caller, 'medical_record', LIST, ResourceHint(patient_id=patient_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(medical_records.find_by_owner('patient_id', patient_id, options.with_forced(forced)))


@medical_record_bp.route('/doctor/<int:doctor_id>', methods=['GET'])
@caller_required
def list_doctor_records(caller, doctor_id):
    forced = enforce(caller, 'medical_record', LIST, ResourceHint(doctor_id=doctor_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(medical_records.find_by_owner('doctor_id', doctor_id, options.with_forced(forced)))


@medical_record_bp.route('/<int:record_id>', methods=['GET'])
@caller_required
def get_medical_record(caller, record_id):
    record = _get_or_404(record_id)
    enforce(caller, 'medical_record', READ, _hint(record))
    return success(record)


@medical_record_bp.route('/<int:record_id>', methods=['PUT'])
@caller_required
def update_medical_record(caller, record_id):
    record = _get_or_404(record_id)
    enforce(caller, 'medical_record', UPDATE, _hint(record))
    data = validate_medical_record(request.get_json(silent=True), is_update=True)
    if data.get('appointment_id'):
        _check_appointment(data['appointment_id'], record['patient_id'], record['doctor_id'])
    updated = medical_records.update(record_id, data)
    if not updated:
        raise NotFoundError('Medical record not found.')
    return success(updated, 'Medical record updated successfully')


@medical_record_bp.route('/<int:record_id>', methods=['DELETE'])
@caller_required
def delete_medical_record(caller, record_id):
    record = _get_or_404(record_id)
    enforce(caller, 'medical_record', DELETE, _hint(record))
    medical_records.delete(record_id)
    return success(message='Medical record deleted successfully')
