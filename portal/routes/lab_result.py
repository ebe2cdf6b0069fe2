from flask import Blueprint, request

from portal.errors import NotFoundError, ValidationError
from portal.query import options_from_args
from portal.repositories import lab_results, medical_records
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_lab_result

lab_result_bp = Blueprint('lab_result', __name__, url_prefix='/api/lab-results')

LIST_FILTERS = {'status': str, 'medical_record_id': int}


def _get_or_404(result_id):
    result = lab_results.find_by_id(result_id)
    if not result:
        raise NotFoundError('Lab result not found.')
    return result


def _hint(result):
    # Lab results have no doctor column; responsibility follows the medical record
    return ResourceHint(patient_id=result['patient_id'], doctor_id=result.get('doctor_id'))


@lab_result_bp.route('', methods=['POST'])
@caller_required
def create_lab_result(caller):
    data = validate_lab_result(request.get_json(silent=True))

    record = medical_records.find_by_id(data['medical_record_id'])
    if not record:
        raise NotFoundError('Medical record not found.')
    enforce(caller, 'lab_result', CREATE, ResourceHint(patient_id=data['patient_id'], doctor_id=record['doctor_id']))
    if record['patient_id'] != data['patient_id']:
        raise ValidationError(errors=['medical_record_id must belong to the same patient'])

    result = lab_results.create(data)
    return success(result, 'Lab result created successfully', 201)


@lab_result_bp.route('/patient/<int:patient_id>', methods=['GET'])
@caller_required
def list_patient_lab_results(caller, patient_id):
    """
    Lab results of one patient
    Query params: page or offset, limit, status, medical_record_id
    """
    forced = enforce(caller, 'lab_result', LIST, ResourceHint(patient_id=patient_id))
    options = options_from_args(request.args, LIST_FILTERS)
    return paginated(lab_results.find_by_owner('patient_id', patient_id, options.with_forced(forced)))


@lab_result_bp.route('/<int:result_id>', methods=['GET'])
@caller_required
def get_lab_result(caller, result_id):
    result = _get_or_404(result_id)
    enforce(caller, 'lab_result', READ, _hint(result))
    return success(result)


@lab_result_bp.route('/<int:result_id>', methods=['PUT'])
@caller_required
def update_lab_result(caller, result_id):
    result = _get_or_404(result_id)
    enforce(caller, 'lab_result', UPDATE, _hint(result))
    data = validate_lab_result(request.get_json(silent=True), is_update=True)
    updated = lab_results.update(result_id, data)
    if not updated:
        raise NotFoundError('Lab result not found.')
    return success(updated, 'Lab result updated successfully')


@lab_result_bp.route('/<int:result_id>', methods=['DELETE'])
@caller_required
def delete_lab_result(caller, result_id):
    result = _get_or_404(result_id)
    enforce(caller, 'lab_result', DELETE, _hint(result))
    lab_results.delete(result_id)
    return success(message='Lab result deleted successfully')
