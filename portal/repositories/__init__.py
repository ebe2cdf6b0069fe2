from .users import UserRepository
from .patients import PatientRepository
from .doctors import DoctorRepository
from .appointments import AppointmentRepository
from .medical_records import MedicalRecordRepository
from .prescriptions import PrescriptionRepository
from .lab_results import LabResultRepository
from .messages import MessageRepository

users = UserRepository()
patients = PatientRepository()
doctors = DoctorRepository()
appointments = AppointmentRepository()
medical_records = MedicalRecordRepository()
prescriptions = PrescriptionRepository()
lab_results = LabResultRepository()
messages = MessageRepository()

__all__ = [
    "UserRepository",
    "PatientRepository",
    "DoctorRepository",
    "AppointmentRepository",
    "MedicalRecordRepository",
    "PrescriptionRepository",
    "LabResultRepository",
    "MessageRepository",
    "users",
    "patients",
    "doctors",
    "appointments",
    "medical_records",
    "prescriptions",
    "lab_results",
    "messages",
]
