def test_patient_creates_and_reads_own_profile(client, patient):
    response = client.get('/api/patients/me', headers=patient['headers'])

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['id'] == patient['patient_id']
    assert data['user_id'] == patient['id']
    assert data['date_of_birth'] == '1990-05-01'


def test_me_without_profile_is_404(client, register):
    user = register('patient')
    response = client.get('/api/patients/me', headers=user['headers'])
    assert response.status_code == 404


def test_patient_cannot_create_profile_for_someone_else(client, register):
    caller = register('patient')
    other = register('patient')

    response = client.post(
        '/api/patients',
        json={'user_id': other['id'], 'date_of_birth': '1990-01-01'},
        headers=caller['headers'],
    )
    assert response.status_code == 403


def test_second_profile_for_same_user_conflicts(client, patient):
    response = client.post(
        '/api/patients',
        json={'user_id': patient['id'], 'date_of_birth': '1991-01-01'},
        headers=patient['headers'],
    )
    assert response.status_code == 409


def test_profile_requires_patient_role(client, admin, register):
    doctor_user = register('doctor')
    response = client.post(
        '/api/patients',
        json={'user_id': doctor_user['id'], 'date_of_birth': '1990-01-01'},
        headers=admin['headers'],
    )
    assert response.status_code == 400


def test_profile_validation(client, register):
    user = register('patient')
    response = client.post(
        '/api/patients',
        json={'user_id': user['id'], 'date_of_birth': '2999-01-01', 'phone': 'abc'},
        headers=user['headers'],
    )

    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert 'Date of birth cannot be in the future' in errors
    assert 'Invalid phone number format' in errors


def test_lookup_by_other_user_id_is_forbidden(client, make_patient):
    caller = make_patient()
    other = make_patient()

    assert client.get(f"/api/patients/user/{caller['id']}", headers=caller['headers']).status_code == 200
    assert client.get(f"/api/patients/user/{other['id']}", headers=caller['headers']).status_code == 403


def test_lookup_by_unowned_user_id_is_forbidden_even_if_absent(client, patient):
    # Ownership is decided from the path before existence
    response = client.get('/api/patients/user/999999', headers=patient['headers'])
    assert response.status_code == 403


def test_lookup_by_id_reports_absence_before_ownership(client, make_patient):
    caller = make_patient()
    other = make_patient()

    assert client.get('/api/patients/999999', headers=caller['headers']).status_code == 404
    response = client.get(f"/api/patients/{other['patient_id']}", headers=caller['headers'])
    assert response.status_code == 403
    assert response.get_json()['code'] == 'FORBIDDEN'


def test_doctor_reads_patient_profile(client, doctor, patient):
    response = client.get(f"/api/patients/{patient['patient_id']}", headers=doctor['headers'])
    assert response.status_code == 200


def test_update_is_allow_listed(client, patient):
    response = client.put(
        f"/api/patients/{patient['patient_id']}",
        json={'phone': '+1 555 123 4567', 'user_id': 12345, 'blood_type': 'O+'},
        headers=patient['headers'],
    )

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['phone'] == '+1 555 123 4567'
    assert data['blood_type'] == 'O+'
    assert data['user_id'] == patient['id']


def test_update_with_no_mutable_fields(client, patient):
    response = client.put(
        f"/api/patients/{patient['patient_id']}",
        json={'user_id': 12345},
        headers=patient['headers'],
    )
    assert response.status_code == 400
    assert response.get_json()['code'] == 'INVALID_UPDATE'


def test_listing_is_for_doctors_and_admins(client, admin, doctor, make_patient):
    caller = make_patient(first_name='Zed')
    make_patient(first_name='Alice')

    assert client.get('/api/patients/all', headers=caller['headers']).status_code == 403

    response = client.get('/api/patients/all?search=alic', headers=doctor['headers'])
    assert response.status_code == 200
    body = response.get_json()
    assert [p['first_name'] for p in body['data']] == ['Alice']
    assert body['pagination']['total'] == 1

    everyone = client.get('/api/patients/all', headers=admin['headers']).get_json()
    assert everyone['pagination']['total'] == 2


def test_search_wildcards_are_literal(client, admin, make_patient):
    make_patient(first_name='Percy')
    response = client.get('/api/patients/all?search=%25', headers=admin['headers'])
    assert response.get_json()['pagination']['total'] == 0


def test_soft_delete_hides_from_listing(client, admin, make_patient):
    gone = make_patient()
    make_patient()

    response = client.delete(f"/api/patients/{gone['patient_id']}", headers=admin['headers'])
    assert response.status_code == 200

    listing = client.get('/api/patients/all', headers=admin['headers']).get_json()
    assert listing['pagination']['total'] == 1
    assert gone['patient_id'] not in [p['id'] for p in listing['data']]

    # The row itself stays; lookups by id still resolve it
    row = client.get(f"/api/patients/{gone['patient_id']}", headers=admin['headers']).get_json()['data']
    assert row['is_active'] is False


def test_invalid_pagination(client, admin):
    response = client.get('/api/patients/all?limit=0&page=abc', headers=admin['headers'])
    assert response.status_code == 400
    assert len(response.get_json()['errors']) == 2


def test_read_by_owner_returns_exactly_that_patient(client, admin, register, make_patient):
    patient = make_patient(date_of_birth='1990-01-01')
    without_profile = register('patient')

    found = client.get(f"/api/patients/user/{patient['id']}", headers=admin['headers'])
    assert found.status_code == 200
    assert found.get_json()['data']['id'] == patient['patient_id']
    assert found.get_json()['data']['date_of_birth'] == '1990-01-01'

    missing = client.get(f"/api/patients/user/{without_profile['id']}", headers=admin['headers'])
    assert missing.status_code == 404
    assert missing.get_json()['code'] == 'NOT_FOUND'
