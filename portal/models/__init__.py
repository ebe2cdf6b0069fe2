from .user import User
from .patient import Patient
from .doctor import Doctor
from .appointment import Appointment
from .medical_record import MedicalRecord
from .prescription import Prescription
from .lab_result import LabResult
from .message import Message

__all__ = ["User", "Patient", "Doctor", "Appointment", "MedicalRecord", "Prescription", "LabResult", "Message"]
