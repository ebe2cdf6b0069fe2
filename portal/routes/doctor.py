from flask import Blueprint, request

from portal.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from portal.query import options_from_args
from portal.repositories import doctors, users
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_doctor

doctor_bp = Blueprint('doctor', __name__, url_prefix='/api/doctors')


def _get_or_404(doctor_id):
    doctor = doctors.find_by_id(doctor_id)
    if not doctor:
        raise NotFoundError('Doctor not found')
    return doctor


@doctor_bp.route('', methods=['POST'])
@caller_required
def create_doctor(caller):
    """Create a doctor profile (admin only)"""
    enforce(caller, 'doctor', CREATE)
    data = validate_doctor(request.get_json(silent=True))

    owner = users.find_by_id(data['user_id'])
    if not owner or owner['role'] != 'doctor':
        raise ValidationError(errors=['user_id must reference a user with the doctor role'])
    if doctors.find_by_user_id(data['user_id']):
        raise ConflictError('Doctor profile already exists for this user.')

    doctor = doctors.create(data)
    return success(doctor, 'Doctor profile created successfully.', 201)


@doctor_bp.route('', methods=['GET'])
@caller_required
def list_doctors(caller):
    """
    Doctor directory
    Query params: page or offset, limit, search, specialization, is_available
    """
    enforce(caller, 'doctor', LIST)
    options = options_from_args(
        request.args, {'search': str, 'specialization': str, 'is_available': bool}
    )
    return paginated(doctors.find_all(options))


@doctor_bp.route('/specialty/<string:specialization>', methods=['GET'])
@caller_required
def list_by_specialization(caller, specialization):
    """Available doctors in a specialty, most experienced first"""
    enforce(caller, 'doctor', LIST)
    options = options_from_args(request.args, {})
    return paginated(doctors.find_by_specialization(specialization, options))


@doctor_bp.route('/me/profile', methods=['GET'])
@caller_required
def get_my_profile(caller):
    """Get current user's doctor profile"""
    if caller.role != 'doctor':
        raise AuthorizationError('Only doctors can access their own profile with this endpoint.')
    doctor = doctors.find_by_user_id(caller.user_id)
    if not doctor:
        raise NotFoundError('Doctor profile not found.')
    return success(doctor)


@doctor_bp.route('/<int:doctor_id>', methods=['GET'])
@caller_required
def get_doctor(caller, doctor_id):
    """Get single doctor by ID (any authenticated role)"""
    doctor = _get_or_404(doctor_id)
    enforce(caller, 'doctor', READ, ResourceHint(owner_user_id=doctor['user_id']))
    return success(doctor)


@doctor_bp.route('/<int:doctor_id>', methods=['PUT'])
@caller_required
def update_doctor(caller, doctor_id):
    """Update doctor profile (the doctor themself or an admin)"""
    doctor = _get_or_404(doctor_id)
    enforce(caller, 'doctor', UPDATE, ResourceHint(owner_user_id=doctor['user_id']))
    data = validate_doctor(request.get_json(silent=True), is_update=True)
    updated = doctors.update(doctor_id, data)
    return success(updated, 'Doctor profile updated successfully.')


@doctor_bp.route('/<int:doctor_id>', methods=['DELETE'])
@caller_required
def delete_doctor(caller, doctor_id):
    """Deactivate doctor (admin only, soft delete)"""
    enforce(caller, 'doctor', DELETE)
    _get_or_404(doctor_id)
    if not doctors.soft_delete(doctor_id):
        raise NotFoundError('Doctor not found')
    return success(message='Doctor profile deleted (deactivated) successfully.')
