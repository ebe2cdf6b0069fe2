"""
Request body validation.

Each validator returns the cleaned, typed subset of the body it knows about
and raises ValidationError listing every problem at once. Nothing here
touches the store.
"""
import re
from datetime import date, time

from portal.errors import ValidationError
from portal.models.appointment import APPOINTMENT_STATUSES
from portal.models.lab_result import LAB_RESULT_STATUSES
from portal.models.medical_record import RECORD_TYPES
from portal.models.prescription import PRESCRIPTION_STATUSES
from portal.models.user import ROLES
from portal.utils.schedule import Schedule

EMAIL = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
PHONE = re.compile(r'^\+?[\d\s\-()]{10,15}$')
LICENSE = re.compile(r'^[A-Z0-9]{6,20}$')


class Checker:
    def __init__(self, data):
        self.data = data if isinstance(data, dict) else {}
        self.errors = []
        self.clean = {}

    def present(self, name):
        value = self.data.get(name)
        return value is not None and value != ''

    def require(self, *names):
        for name in names:
            if not self.present(name):
                self.errors.append(f'{name} is required')
        return self

    def text(self, *names):
        for name in names:
            if self.present(name):
                self.clean[name] = str(self.data[name]).strip()
        return self

    def pattern(self, name, regex, message):
        if self.present(name):
            value = str(self.data[name]).strip()
            if regex.match(value):
                self.clean[name] = value
            else:
                self.errors.append(message)
        return self

    def choice(self, name, options):
        if self.present(name):
            if self.data[name] in options:
                self.clean[name] = self.data[name]
            else:
                self.errors.append(f'{name} must be one of: {", ".join(options)}')
        return self

    def integer(self, name, minimum=None, maximum=None, message=None):
        if not self.present(name):
            return self
        value = self.data[name]
        try:
            if isinstance(value, bool):
                raise TypeError
            number = int(value)
            if isinstance(value, float) and not value.is_integer():
                raise ValueError
        except (TypeError, ValueError):
            self.errors.append(f'{name} must be an integer')
            return self
        if (minimum is not None and number < minimum) or (maximum is not None and number > maximum):
            self.errors.append(message or f'{name} is out of range')
            return self
        self.clean[name] = number
        return self

    def number(self, name, minimum=None, message=None):
        if not self.present(name):
            return self
        try:
            if isinstance(self.data[name], bool):
                raise TypeError
            value = float(self.data[name])
        except (TypeError, ValueError):
            self.errors.append(f'{name} must be a number')
            return self
        if minimum is not None and value < minimum:
            self.errors.append(message or f'{name} is out of range')
            return self
        self.clean[name] = value
        return self

    def boolean(self, name):
        if self.present(name):
            if isinstance(self.data[name], bool):
                self.clean[name] = self.data[name]
            else:
                self.errors.append(f'{name} must be true or false')
        return self

    def date(self, name, not_future=False, message=None):
        if not self.present(name):
            return self
        try:
            value = date.fromisoformat(str(self.data[name]))
        except ValueError:
            self.errors.append(f'{name} must be a date in YYYY-MM-DD format')
            return self
        if not_future and value > date.today():
            self.errors.append(message or f'{name} cannot be in the future')
            return self
        self.clean[name] = value
        return self

    def time(self, name):
        if not self.present(name):
            return self
        try:
            value = time.fromisoformat(str(self.data[name]))
        except ValueError:
            self.errors.append(f'{name} must be a time in HH:MM format')
            return self
        self.clean[name] = value.strftime('%H:%M:%S')
        return self

    def schedule(self, name):
        if self.present(name):
            try:
                self.clean[name] = Schedule.parse(self.data[name])
            except ValidationError as e:
                self.errors.extend(e.errors)
        return self

    def done(self):
        if self.errors:
            raise ValidationError(errors=self.errors)
        return self.clean


def validate_registration(data):
    checker = Checker(data).require('email', 'password', 'role', 'first_name', 'last_name')
    checker.pattern('email', EMAIL, 'Invalid email address')
    checker.choice('role', ROLES)
    checker.text('first_name', 'last_name')
    if checker.present('password'):
        if len(str(checker.data['password'])) < 8:
            checker.errors.append('password must be at least 8 characters')
        else:
            checker.clean['password'] = str(checker.data['password'])
    return checker.done()


def validate_credentials(data):
    checker = Checker(data).require('email', 'password')
    if checker.errors:
        raise ValidationError('Email and password are required.', errors=checker.errors)
    return str(checker.data['email']), str(checker.data['password'])


def validate_patient(data, is_update=False):
    checker = Checker(data)
    if not is_update:
        checker.require('user_id', 'date_of_birth').integer('user_id', minimum=1)
    checker.date('date_of_birth', not_future=True, message='Date of birth cannot be in the future')
    checker.pattern('phone', PHONE, 'Invalid phone number format')
    checker.pattern('emergency_contact_phone', PHONE, 'Invalid emergency contact phone format')
    checker.text(
        'address', 'emergency_contact_name', 'blood_type', 'allergies',
        'medical_conditions', 'insurance_provider', 'insurance_policy_number',
    )
    return checker.done()


def validate_doctor(data, is_update=False):
    checker = Checker(data)
    if not is_update:
        checker.require('user_id', 'specialization', 'license_number').integer('user_id', minimum=1)
    checker.text('specialization', 'education')
    checker.pattern(
        'license_number', LICENSE,
        'License number should be 6-20 characters, letters and numbers only',
    )
    checker.pattern('phone', PHONE, 'Invalid phone number format')
    checker.integer(
        'years_experience', minimum=0, maximum=50,
        message='Years of experience must be between 0 and 50',
    )
    checker.number('consultation_fee', minimum=0, message='Consultation fee cannot be negative')
    checker.schedule('availability')
    checker.boolean('is_available')
    return checker.done()


def validate_appointment(data, is_update=False):
    checker = Checker(data)
    if not is_update:
        checker.require('patient_id', 'doctor_id', 'appointment_date', 'appointment_time')
        checker.integer('patient_id', minimum=1).integer('doctor_id', minimum=1)
    checker.date('appointment_date').time('appointment_time')
    checker.integer('duration_minutes', minimum=1, message='duration_minutes must be a positive number')
    checker.choice('status', APPOINTMENT_STATUSES)
    checker.text('reason', 'notes')
    return checker.done()


def validate_medical_record(data, is_update=False):
    checker = Checker(data)
    if not is_update:
        checker.require('patient_id', 'doctor_id', 'record_type', 'title')
        checker.integer('patient_id', minimum=1).integer('doctor_id', minimum=1)
    checker.integer('appointment_id', minimum=1)
    checker.choice('record_type', RECORD_TYPES)
    checker.text('title', 'description', 'diagnosis', 'treatment_plan', 'file_path')
    checker.date('record_date')
    return checker.done()


def validate_prescription(data, is_update=False):
    checker = Checker(data)
    if not is_update:
        checker.require('medical_record_id', 'patient_id', 'doctor_id', 'medication_name', 'dosage', 'frequency')
        checker.integer('medical_record_id', minimum=1)
        checker.integer('patient_id', minimum=1).integer('doctor_id', minimum=1)
    checker.text('medication_name', 'dosage', 'frequency', 'duration', 'instructions')
    checker.choice('status', PRESCRIPTION_STATUSES)
    checker.date('prescribed_date')
    return checker.done()


def validate_lab_result(data, is_update=False):
    checker = Checker(data)
    if not is_update:
        checker.require('medical_record_id', 'patient_id', 'test_name')
        checker.integer('medical_record_id', minimum=1).integer('patient_id', minimum=1)
    checker.text('test_name', 'test_type', 'result_value', 'reference_range', 'unit', 'lab_technician', 'notes')
    checker.choice('status', LAB_RESULT_STATUSES)
    checker.date('test_date')
    return checker.done()


def validate_message(data):
    checker = Checker(data).require('recipient_id', 'message')
    checker.integer('recipient_id', minimum=1)
    checker.text('subject', 'message')
    return checker.done()
