from flask import Blueprint, request

from portal.errors import NotFoundError, ValidationError
from portal.query import options_from_args
from portal.repositories import medical_records, prescriptions
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_prescription

prescription_bp = Blueprint('prescription', __name__, url_prefix='/api/prescriptions')

LIST_FILTERS = {'status': str, 'medical_record_id': int}


def _get_or_404(prescription_id):
    prescription = prescriptions.find_by_id(prescription_id)
    if not prescription:
        raise NotFoundError('Prescription not found.')
    return prescription


def _hint(prescription):
    return ResourceHint(patient_id=prescription['patient_id'], doctor_id=prescription['doctor_id'])


@prescription_bp.route('', methods=['POST'])
@caller_required
def create_prescription(caller):
    """Prescribe against an existing medical record of the same patient and doctor"""
    data = validate_prescription(request.get_json(silent=True))
    enforce(caller, 'prescription', CREATE, _hint(data))

    record = medical_records.find_by_id(data['medical_record_id'])
    if not record:
        raise NotFoundError('Medical record not found.')
    if record['patient_id'] != data['patient_id'] or record['doctor_id'] != data['doctor_id']:
        raise ValidationError(errors=['medical_record_id must belong to the same patient and doctor'])

    prescription = prescriptions.create(data)
    return success(prescription, 'Prescription created successfully', 201)


@prescription_bp.route('/patient/<int:patient_id>', methods=['GET'])
@caller_required
def list_patient_prescriptions(caller, patient_id):
    """
    Prescriptions of one patient
    Query params: page or offset, limit, status, medical_record_id
    """
    forced = enforce(caller, 'prescription', LIST, ResourceHint(patient_id=patient_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(prescriptions.find_by_owner('patient_id', patient_id, options.with_forced(forced)))


@prescription_bp.route('/doctor/<int:doctor_id>', methods=['GET'])
@caller_required
def list_doctor_prescriptions(caller, doctor_id):
    forced = enforce(caller, 'prescription', LIST, ResourceHint(doctor_id=doctor_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(prescriptions.find_by_owner('doctor_id', doctor_id, options.with_forced(forced)))


@prescription_bp.route('/<int:prescription_id>', methods=['GET'])
@caller_required
def get_prescription(caller, prescription_id):
    prescription = _get_or_404(prescription_id)
    enforce(caller, 'prescription', READ, _hint(prescription))
    return success(prescription)


@prescription_bp.route('/<int:prescription_id>', methods=['PUT'])
@caller_required
def update_prescription(caller, prescription_id):
    prescription = _get_or_404(prescription_id)
    enforce(caller, 'prescription', UPDATE, _hint(prescription))
    data = validate_prescription(request.get_json(silent=True), is_update=True)
    updated = prescriptions.update(prescription_id, data)
    if not updated:
        raise NotFoundError('Prescription not found.')
    return success(updated, 'Prescription updated successfully')


@prescription_bp.route('/<int:prescription_id>', methods=['DELETE'])
@caller_required
def delete_prescription(caller, prescription_id):
    prescription = _get_or_404(prescription_id)
    enforce(caller, 'prescription', DELETE, _hint(prescription))
    prescriptions.delete(prescription_id)
    return success(message='Prescription deleted successfully')
