from flask import Blueprint, request

from portal.errors import ConflictError, NotFoundError, ValidationError
from portal.query import options_from_args
from portal.repositories import patients, users
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_patient

patient_bp = Blueprint('patient', __name__, url_prefix='/api/patients')


def _get_or_404(patient_id):
    patient = patients.find_by_id(patient_id)
    if not patient:
        raise NotFoundError('Patient not found')
    return patient


@patient_bp.route('', methods=['POST'])
@caller_required
def create_patient(caller):
    """Create a patient profile (patients may only create their own)"""
    data = validate_patient(request.get_json(silent=True))
    enforce(caller, 'patient', CREATE, ResourceHint(owner_user_id=data['user_id']))

    owner = users.find_by_id(data['user_id'])
    if not owner or owner['role'] != 'patient':
        raise ValidationError(errors=['user_id must reference a user with the patient role'])
    if patients.find_by_user_id(data['user_id']):
        raise ConflictError('Patient profile already exists for this user')

    patient = patients.create(data)
    return success(patient, 'Patient profile created successfully', 201)


@patient_bp.route('/me', methods=['GET'])
@caller_required
def get_my_profile(caller):
    """Get current user's patient profile"""
    patient = patients.find_by_user_id(caller.user_id)
    if not patient:
        raise NotFoundError('Patient profile not found. Please create your profile first.')
    return success(patient)


@patient_bp.route('/all', methods=['GET'])
@caller_required
def list_patients(caller):
    """
    List active patients with pagination and search
    Query params: page or offset, limit, search
    """
    enforce(caller, 'patient', LIST)
    options = options_from_args(request.args, {'search': str})
    return paginated(patients.find_all(options))


@patient_bp.route('/user/<int:user_id>', methods=['GET'])
@caller_required
def get_patient_by_user(caller, user_id):
    """Get patient profile by owning user id"""
    # Ownership is known from the path, so deny before looking anything up
    enforce(caller, 'patient', READ, ResourceHint(owner_user_id=user_id))
    patient = patients.find_by_user_id(user_id)
    if not patient:
        raise NotFoundError('Patient profile not found')
    return success(patient)


@patient_bp.route('/<int:patient_id>', methods=['GET'])
@caller_required
def get_patient(caller, patient_id):
    """Get single patient by ID"""
    patient = _get_or_404(patient_id)
    enforce(caller, 'patient', READ, ResourceHint(owner_user_id=patient['user_id']))
    return success(patient)


@patient_bp.route('/<int:patient_id>', methods=['PUT'])
@caller_required
def update_patient(caller, patient_id):
    """Update patient information (user_id is never changed)"""
    patient = _get_or_404(patient_id)
    enforce(caller, 'patient', UPDATE, ResourceHint(owner_user_id=patient['user_id']))
    data = validate_patient(request.get_json(silent=True), is_update=True)
    updated = patients.update(patient_id, data)
    return success(updated, 'Patient profile updated successfully')


@patient_bp.route('/<int:patient_id>', methods=['DELETE'])
@caller_required
def delete_patient(caller, patient_id):
    """Deactivate the patient's user account (soft delete)"""
    patient = _get_or_404(patient_id)
    enforce(caller, 'patient', DELETE, ResourceHint(owner_user_id=patient['user_id']))
    if not patients.soft_delete(patient_id):
        raise NotFoundError('Patient not found')
    return success(message='Patient profile deleted successfully')
