AVAILABILITY = {
    'monday': [{'start': '09:00', 'end': '12:00'}],
    'Wednesday': [{'start': '14:00', 'end': '17:30'}],
}


def test_only_admin_creates_doctor_profiles(client, register):
    user = register('doctor')
    response = client.post(
        '/api/doctors',
        json={'user_id': user['id'], 'specialization': 'Dermatology', 'license_number': 'ABC12345'},
        headers=user['headers'],
    )
    assert response.status_code == 403


def test_doctor_profile_round_trips_schedule(client, make_doctor, patient):
    doctor = make_doctor(availability=AVAILABILITY, consultation_fee=120.5, years_experience=12)

    response = client.get(f"/api/doctors/{doctor['doctor_id']}", headers=patient['headers'])
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['availability'] == {
        'monday': [{'start': '09:00', 'end': '12:00'}],
        'wednesday': [{'start': '14:00', 'end': '17:30'}],
    }
    assert data['consultation_fee'] == 120.5
    assert data['is_available'] is True


def test_doctor_validation(client, admin, register):
    user = register('doctor')
    response = client.post('/api/doctors', json={
        'user_id': user['id'],
        'specialization': 'Neurology',
        'license_number': 'bad-license',
        'years_experience': 70,
        'consultation_fee': -5,
        'availability': {'funday': [], 'monday': [{'start': '12:00', 'end': '09:00'}]},
    }, headers=admin['headers'])

    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert 'License number should be 6-20 characters, letters and numbers only' in errors
    assert 'Years of experience must be between 0 and 50' in errors
    assert 'Consultation fee cannot be negative' in errors
    assert len(errors) == 5


def test_duplicate_license_conflicts(client, admin, make_doctor, register):
    make_doctor(license_number='DUPL1234')
    user = register('doctor')
    response = client.post(
        '/api/doctors',
        json={'user_id': user['id'], 'specialization': 'Cardiology', 'license_number': 'DUPL1234'},
        headers=admin['headers'],
    )
    assert response.status_code == 409


def test_directory_filters(client, patient, make_doctor):
    make_doctor(first_name='Grace', specialization='Cardiology')
    make_doctor(first_name='Alan', specialization='Neurology')
    make_doctor(first_name='Ada', specialization='Pediatric Cardiology', is_available=False)

    def names(query):
        response = client.get(f'/api/doctors{query}', headers=patient['headers'])
        assert response.status_code == 200
        return sorted(d['first_name'] for d in response.get_json()['data'])

    assert names('') == ['Ada', 'Alan', 'Grace']
    assert names('?specialization=cardio') == ['Ada', 'Grace']
    assert names('?search=ala') == ['Alan']
    assert names('?is_available=false') == ['Ada']
    assert names('?specialization=cardio&is_available=true') == ['Grace']


def test_specialty_listing_orders_by_experience(client, patient, make_doctor):
    make_doctor(first_name='Junior', specialization='Oncology', years_experience=2)
    make_doctor(first_name='Senior', specialization='Oncology', years_experience=25)
    make_doctor(first_name='Away', specialization='Oncology', years_experience=30, is_available=False)
    make_doctor(first_name='Other', specialization='Radiology', years_experience=40)

    response = client.get('/api/doctors/specialty/oncology', headers=patient['headers'])
    body = response.get_json()
    assert [d['first_name'] for d in body['data']] == ['Senior', 'Junior']
    assert body['pagination']['total'] == 2


def test_my_profile(client, doctor, patient):
    response = client.get('/api/doctors/me/profile', headers=doctor['headers'])
    assert response.status_code == 200
    assert response.get_json()['data']['id'] == doctor['doctor_id']

    response = client.get('/api/doctors/me/profile', headers=patient['headers'])
    assert response.status_code == 403
    assert response.get_json()['code'] == 'FORBIDDEN'


def test_doctor_updates_only_own_profile(client, make_doctor):
    doctor = make_doctor()
    other = make_doctor()

    own = client.put(
        f"/api/doctors/{doctor['doctor_id']}",
        json={'is_available': False, 'availability': {'friday': [{'start': '08:00', 'end': '10:00'}]}},
        headers=doctor['headers'],
    )
    assert own.status_code == 200
    assert own.get_json()['data']['is_available'] is False
    assert own.get_json()['data']['availability'] == {'friday': [{'start': '08:00', 'end': '10:00'}]}

    assert client.put(
        f"/api/doctors/{other['doctor_id']}",
        json={'is_available': False},
        headers=doctor['headers'],
    ).status_code == 403


def test_soft_delete_hides_doctor_but_keeps_appointments(client, admin, doctor, patient, book):
    appointment = book(patient, patient, doctor)

    assert client.delete(f"/api/doctors/{doctor['doctor_id']}", headers=patient['headers']).status_code == 403
    assert client.delete(f"/api/doctors/{doctor['doctor_id']}", headers=admin['headers']).status_code == 200

    assert client.get(f"/api/doctors/{doctor['doctor_id']}", headers=patient['headers']).status_code == 404
    listing = client.get('/api/doctors', headers=patient['headers']).get_json()
    assert listing['pagination']['total'] == 0

    response = client.get(f"/api/appointments/{appointment['id']}", headers=patient['headers'])
    assert response.status_code == 200
    assert response.get_json()['data']['doctor_id'] == doctor['doctor_id']

    # No longer bookable
    assert client.post('/api/appointments', json={
        'patient_id': patient['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'appointment_date': '2030-02-01',
        'appointment_time': '09:00',
    }, headers=patient['headers']).status_code == 404
