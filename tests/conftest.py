import itertools

import pytest

from portal import create_app
from portal.extensions import db

_sequence = itertools.count(1)

PASSWORD = 'password123'


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def app():
    # Requests must run outside this setup context, otherwise they share its `g`
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register a user of ``role`` through the API; returns id, email and ready headers."""
    def _register(role, email=None, password=PASSWORD, **extra):
        n = next(_sequence)
        email = email or f'{role}{n}@example.com'
        response = client.post('/api/auth/register', json={
            'email': email,
            'password': password,
            'role': role,
            'first_name': extra.get('first_name', 'Test'),
            'last_name': extra.get('last_name', f'User{n}'),
        })
        assert response.status_code == 201, response.get_json()
        data = response.get_json()['data']
        return {
            'id': data['user']['id'],
            'email': email,
            'password': password,
            'token': data['token'],
            'refresh_token': data['refreshToken'],
            'headers': auth_header(data['token']),
        }
    return _register


@pytest.fixture
def admin(register):
    return register('admin')


@pytest.fixture
def make_patient(client, register):
    def _make(**profile):
        user = register('patient', **{k: profile.pop(k) for k in ('first_name', 'last_name') if k in profile})
        body = {'user_id': user['id'], 'date_of_birth': '1990-05-01', **profile}
        response = client.post('/api/patients', json=body, headers=user['headers'])
        assert response.status_code == 201, response.get_json()
        user['patient_id'] = response.get_json()['data']['id']
        return user
    return _make


@pytest.fixture
def make_doctor(client, register, admin):
    def _make(**profile):
        user = register('doctor', **{k: profile.pop(k) for k in ('first_name', 'last_name') if k in profile})
        body = {
            'user_id': user['id'],
            'specialization': 'Cardiology',
            'license_number': f'LIC{next(_sequence):06d}',
            **profile,
        }
        response = client.post('/api/doctors', json=body, headers=admin['headers'])
        assert response.status_code == 201, response.get_json()
        user['doctor_id'] = response.get_json()['data']['id']
        return user
    return _make


@pytest.fixture
def patient(make_patient):
    return make_patient()


@pytest.fixture
def doctor(make_doctor):
    return make_doctor()


@pytest.fixture
def book(client):
    """Book an appointment as ``caller``; returns the created row."""
    def _book(caller, patient, doctor, **fields):
        body = {
            'patient_id': patient['patient_id'],
            'doctor_id': doctor['doctor_id'],
            'appointment_date': '2030-01-15',
            'appointment_time': '10:30',
            **fields,
        }
        response = client.post('/api/appointments', json=body, headers=caller['headers'])
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _book
