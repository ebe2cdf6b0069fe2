from flask import Blueprint, request
from flask_jwt_extended import get_current_user, jwt_required

from portal.services import auth_service
from portal.services.policy import READ, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import success
from portal.utils.validation import validate_credentials

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a user and return an access/refresh token pair"""
    user, tokens = auth_service.register(request.get_json(silent=True))
    return success(
        {'user': auth_service.public_user(user), **tokens},
        'User registered successfully',
        201,
    )


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login endpoint - authenticates a user and returns JWT tokens"""
    email, password = validate_credentials(request.get_json(silent=True))
    user, tokens = auth_service.login(email, password)
    return success({'user': auth_service.public_user(user), **tokens}, 'Login successful')


@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    """Refresh access token using refresh token"""
    return success(auth_service.refresh(get_current_user()), 'Token refreshed')


@auth_bp.route('/profile', methods=['GET'])
@caller_required
def profile(caller):
    """Get the authenticated user"""
    user = get_current_user()
    enforce(caller, 'user', READ, ResourceHint(owner_user_id=user['id']))
    return success(
        {
            **auth_service.public_user(user),
            'patientId': caller.patient_id,
            'doctorId': caller.doctor_id,
        },
        'Profile retrieved successfully',
    )
