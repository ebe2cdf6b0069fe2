from .auth import auth_bp
from .patient import patient_bp
from .doctor import doctor_bp
from .appointment import appointment_bp
from .medical_record import medical_record_bp
from .prescription import prescription_bp
from .lab_result import lab_result_bp
from .message import message_bp
from .health import health_bp

BLUEPRINTS = (
    auth_bp,
    patient_bp,
    doctor_bp,
    appointment_bp,
    medical_record_bp,
    prescription_bp,
    lab_result_bp,
    message_bp,
    health_bp,
)

__all__ = [
    "auth_bp",
    "patient_bp",
    "doctor_bp",
    "appointment_bp",
    "medical_record_bp",
    "prescription_bp",
    "lab_result_bp",
    "message_bp",
    "health_bp",
    "BLUEPRINTS",
]
