from functools import wraps

from flask import g
from flask_jwt_extended import get_current_user, jwt_required

from portal.repositories import doctors, patients
from portal.services.policy import Caller


def current_caller():
    """Caller for this request, profile ids resolved once from the store."""
    if 'caller' not in g:
        user = get_current_user()
        patient_id = doctor_id = None
        if user['role'] == 'patient':
            profile = patients.find_by_user_id(user['id'])
            patient_id = profile['id'] if profile else None
        elif user['role'] == 'doctor':
            profile = doctors.find_by_user_id(user['id'])
            doctor_id = profile['id'] if profile else None
        g.caller = Caller(
            user_id=user['id'],
            role=user['role'],
            patient_id=patient_id,
            doctor_id=doctor_id,
            email=user['email'],
        )
    return g.caller


def caller_required(f):
    """
    Require a valid access token and pass the resolved Caller as the first
    argument of the view.
    """
    @wraps(f)
    @jwt_required()
    def decorated_function(*args, **kwargs):
        return f(current_caller(), *args, **kwargs)
    return decorated_function
