from datetime import date

import pytest


@pytest.fixture
def record(client, patient, doctor):
    response = client.post('/api/medical-records', json={
        'patient_id': patient['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'record_type': 'consultation',
        'title': 'Initial visit',
        'diagnosis': 'Healthy',
    }, headers=doctor['headers'])
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']


def test_record_defaults_to_today(record):
    assert record['record_date'] == date.today().isoformat()
    assert record['appointment_id'] is None


def test_patient_cannot_write_records(client, patient, doctor, record):
    response = client.post('/api/medical-records', json={
        'patient_id': patient['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'record_type': 'diagnosis',
        'title': 'Self diagnosis',
    }, headers=patient['headers'])
    assert response.status_code == 403

    update = client.put(f"/api/medical-records/{record['id']}", json={'title': 'x'}, headers=patient['headers'])
    assert update.status_code == 403


def test_doctor_cannot_write_records_as_colleague(client, patient, doctor, make_doctor):
    colleague = make_doctor()
    response = client.post('/api/medical-records', json={
        'patient_id': patient['patient_id'],
        'doctor_id': colleague['doctor_id'],
        'record_type': 'consultation',
        'title': 'Borrowed identity',
    }, headers=doctor['headers'])
    assert response.status_code == 403


def test_record_linked_to_matching_appointment(client, patient, doctor, make_patient, book):
    appointment = book(patient, patient, doctor)
    stranger = make_patient()
    unrelated = book(stranger, stranger, doctor)

    body = {
        'patient_id': patient['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'record_type': 'consultation',
        'title': 'Follow-up',
    }
    ok = client.post('/api/medical-records', json={**body, 'appointment_id': appointment['id']}, headers=doctor['headers'])
    assert ok.status_code == 201
    assert ok.get_json()['data']['appointment_id'] == appointment['id']

    mismatch = client.post('/api/medical-records', json={**body, 'appointment_id': unrelated['id']}, headers=doctor['headers'])
    assert mismatch.status_code == 400


def test_record_listing_respects_roles(client, patient, make_patient, doctor, record):
    other = make_patient()

    own = client.get(f"/api/medical-records/patient/{patient['patient_id']}", headers=patient['headers']).get_json()
    assert [r['id'] for r in own['data']] == [record['id']]

    assert client.get(
        f"/api/medical-records/patient/{patient['patient_id']}", headers=other['headers']
    ).status_code == 403
    assert client.get(f"/api/medical-records/{record['id']}", headers=other['headers']).status_code == 403

    by_doctor = client.get(
        f"/api/medical-records/doctor/{doctor['doctor_id']}?record_type=consultation", headers=doctor['headers']
    ).get_json()
    assert by_doctor['pagination']['total'] == 1


def test_record_hard_delete(client, admin, record):
    url = f"/api/medical-records/{record['id']}"
    assert client.delete(url, headers=admin['headers']).status_code == 200
    assert client.get(url, headers=admin['headers']).status_code == 404


def test_prescription_lifecycle(client, patient, doctor, record):
    response = client.post('/api/prescriptions', json={
        'medical_record_id': record['id'],
        'patient_id': patient['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'medication_name': 'Amoxicillin',
        'dosage': '500mg',
        'frequency': 'twice daily',
    }, headers=doctor['headers'])
    assert response.status_code == 201
    prescription = response.get_json()['data']
    assert prescription['status'] == 'active'
    assert prescription['prescribed_date'] == date.today().isoformat()

    listing = client.get(f"/api/prescriptions/patient/{patient['patient_id']}", headers=patient['headers']).get_json()
    assert [p['id'] for p in listing['data']] == [prescription['id']]

    updated = client.put(
        f"/api/prescriptions/{prescription['id']}",
        json={'status': 'completed', 'patient_id': 999},
        headers=doctor['headers'],
    ).get_json()['data']
    assert updated['status'] == 'completed'
    assert updated['patient_id'] == patient['patient_id']

    active = client.get(
        f"/api/prescriptions/doctor/{doctor['doctor_id']}?status=active", headers=doctor['headers']
    ).get_json()
    assert active['pagination']['total'] == 0


def test_prescription_must_match_record(client, make_patient, doctor, record):
    other = make_patient()
    response = client.post('/api/prescriptions', json={
        'medical_record_id': record['id'],
        'patient_id': other['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'medication_name': 'Ibuprofen',
        'dosage': '200mg',
        'frequency': 'as needed',
    }, headers=doctor['headers'])
    assert response.status_code == 400


def test_prescription_for_missing_record(client, patient, doctor):
    response = client.post('/api/prescriptions', json={
        'medical_record_id': 9999,
        'patient_id': patient['patient_id'],
        'doctor_id': doctor['doctor_id'],
        'medication_name': 'Ibuprofen',
        'dosage': '200mg',
        'frequency': 'as needed',
    }, headers=doctor['headers'])
    assert response.status_code == 404


def test_lab_result_follows_record_doctor(client, patient, doctor, make_doctor, record):
    colleague = make_doctor()
    body = {
        'medical_record_id': record['id'],
        'patient_id': patient['patient_id'],
        'test_name': 'CBC',
        'result_value': '5.2',
        'unit': 'x10^9/L',
    }

    assert client.post('/api/lab-results', json=body, headers=colleague['headers']).status_code == 403

    response = client.post('/api/lab-results', json=body, headers=doctor['headers'])
    assert response.status_code == 201
    result = response.get_json()['data']
    assert result['status'] == 'pending'
    assert result['doctor_id'] == doctor['doctor_id']

    assert client.get(f"/api/lab-results/{result['id']}", headers=colleague['headers']).status_code == 403
    assert client.get(f"/api/lab-results/{result['id']}", headers=patient['headers']).status_code == 200

    listing = client.get(f"/api/lab-results/patient/{patient['patient_id']}", headers=doctor['headers']).get_json()
    assert listing['pagination']['total'] == 1
    # The colleague's forced filter leaves nothing
    none = client.get(f"/api/lab-results/patient/{patient['patient_id']}", headers=colleague['headers']).get_json()
    assert none['pagination']['total'] == 0

    updated = client.put(
        f"/api/lab-results/{result['id']}", json={'status': 'abnormal'}, headers=doctor['headers']
    ).get_json()['data']
    assert updated['status'] == 'abnormal'

    assert client.delete(f"/api/lab-results/{result['id']}", headers=patient['headers']).status_code == 403
    assert client.delete(f"/api/lab-results/{result['id']}", headers=doctor['headers']).status_code == 200
