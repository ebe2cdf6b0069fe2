import pytest

from portal.errors import AuthorizationError
from portal.services.policy import (
    CREATE,
    DELETE,
    LIST,
    READ,
    UPDATE,
    Allow,
    AllowWithForcedFilter,
    Caller,
    Deny,
    ResourceHint,
    decide,
    enforce,
)

ADMIN = Caller(user_id=1, role='admin')
PATIENT = Caller(user_id=7, role='patient', patient_id=3)
OTHER_PATIENT = Caller(user_id=8, role='patient', patient_id=4)
DOCTOR = Caller(user_id=20, role='doctor', doctor_id=5)
PATIENT_WITHOUT_PROFILE = Caller(user_id=9, role='patient')


@pytest.mark.parametrize('resource', ['patient', 'doctor', 'appointment', 'medical_record', 'prescription', 'lab_result'])
@pytest.mark.parametrize('action', [CREATE, READ, UPDATE, DELETE, LIST])
def test_admin_is_allowed_everything(resource, action):
    assert isinstance(decide(ADMIN, resource, action, ResourceHint(owner_user_id=99, patient_id=9, doctor_id=9)), Allow)


def test_patient_profile_ownership():
    assert isinstance(decide(PATIENT, 'patient', READ, ResourceHint(owner_user_id=7)), Allow)
    assert isinstance(decide(PATIENT, 'patient', READ, ResourceHint(owner_user_id=8)), Deny)
    assert isinstance(decide(PATIENT, 'patient', CREATE, ResourceHint(owner_user_id=8)), Deny)
    assert isinstance(decide(PATIENT, 'patient', UPDATE, ResourceHint(owner_user_id=7)), Allow)


def test_patient_cannot_list_patients():
    assert isinstance(decide(PATIENT, 'patient', LIST), Deny)
    assert isinstance(decide(DOCTOR, 'patient', LIST), Allow)


def test_doctor_reads_but_does_not_edit_patient_profiles():
    hint = ResourceHint(owner_user_id=7)
    assert isinstance(decide(DOCTOR, 'patient', READ, hint), Allow)
    assert isinstance(decide(DOCTOR, 'patient', UPDATE, hint), Deny)
    assert isinstance(decide(DOCTOR, 'patient', DELETE, hint), Deny)


def test_doctor_directory_is_public_to_authenticated_callers():
    assert isinstance(decide(PATIENT, 'doctor', LIST), Allow)
    assert isinstance(decide(PATIENT, 'doctor', READ, ResourceHint(owner_user_id=20)), Allow)
    assert isinstance(decide(PATIENT, 'doctor', UPDATE, ResourceHint(owner_user_id=20)), Deny)
    assert isinstance(decide(DOCTOR, 'doctor', UPDATE, ResourceHint(owner_user_id=20)), Allow)
    assert isinstance(decide(DOCTOR, 'doctor', UPDATE, ResourceHint(owner_user_id=21)), Deny)
    assert isinstance(decide(DOCTOR, 'doctor', CREATE), Deny)
    assert isinstance(decide(DOCTOR, 'doctor', DELETE), Deny)


def test_patient_listing_is_forced_to_own_profile():
    decision = decide(PATIENT, 'appointment', LIST)
    assert decision == AllowWithForcedFilter({'patient_id': 3})


def test_doctor_listing_is_forced_to_own_profile():
    decision = decide(DOCTOR, 'medical_record', LIST)
    assert decision == AllowWithForcedFilter({'doctor_id': 5})


def test_forced_filter_comes_from_profile_not_hint():
    # A patient asking for someone else's list is denied outright
    assert isinstance(decide(PATIENT, 'prescription', LIST, ResourceHint(patient_id=4)), Deny)
    decision = decide(PATIENT, 'prescription', LIST, ResourceHint(patient_id=3))
    assert decision.filters == {'patient_id': 3}


def test_patient_without_profile_is_denied_clinical_access():
    assert isinstance(decide(PATIENT_WITHOUT_PROFILE, 'appointment', LIST), Deny)


def test_patient_writes_only_own_appointments():
    own = ResourceHint(patient_id=3, doctor_id=5)
    other = ResourceHint(patient_id=4, doctor_id=5)
    assert isinstance(decide(PATIENT, 'appointment', CREATE, own), Allow)
    assert isinstance(decide(PATIENT, 'appointment', DELETE, own), Allow)
    assert isinstance(decide(PATIENT, 'appointment', CREATE, other), Deny)
    assert isinstance(decide(PATIENT, 'medical_record', CREATE, own), Deny)
    assert isinstance(decide(PATIENT, 'lab_result', UPDATE, own), Deny)


def test_doctor_limited_to_own_clinical_records():
    assert isinstance(decide(DOCTOR, 'medical_record', UPDATE, ResourceHint(patient_id=3, doctor_id=5)), Allow)
    assert isinstance(decide(DOCTOR, 'medical_record', READ, ResourceHint(patient_id=3, doctor_id=6)), Deny)


def test_message_rules():
    hint = ResourceHint(sender_id=7, recipient_id=20)
    assert decide(PATIENT, 'message', LIST) == AllowWithForcedFilter({'user_id': 7})
    assert decide(PATIENT, 'message', CREATE) == AllowWithForcedFilter({'sender_id': 7})
    assert isinstance(decide(PATIENT, 'message', READ, hint), Allow)
    assert isinstance(decide(OTHER_PATIENT, 'message', READ, hint), Deny)
    assert isinstance(decide(OTHER_PATIENT, 'message', DELETE, hint), Deny)
    # Only the recipient marks as read, admins included
    assert isinstance(decide(DOCTOR, 'message', UPDATE, hint), Allow)
    assert isinstance(decide(PATIENT, 'message', UPDATE, hint), Deny)
    assert isinstance(decide(ADMIN, 'message', UPDATE, hint), Deny)
    assert isinstance(decide(ADMIN, 'message', READ, hint), Allow)


def test_admin_mailbox_is_still_narrowed():
    assert decide(ADMIN, 'message', LIST) == AllowWithForcedFilter({'user_id': 1})


def test_unknown_resource_is_denied():
    assert isinstance(decide(PATIENT, 'invoice', READ), Deny)


def test_enforce_raises_and_returns_filters():
    with pytest.raises(AuthorizationError) as exc:
        enforce(PATIENT, 'patient', READ, ResourceHint(owner_user_id=8))
    assert exc.value.status_code == 403
    assert enforce(PATIENT, 'appointment', LIST) == {'patient_id': 3}
    assert enforce(ADMIN, 'appointment', LIST) == {}


def test_decide_is_deterministic():
    hint = ResourceHint(patient_id=3)
    assert decide(PATIENT, 'lab_result', LIST, hint) == decide(PATIENT, 'lab_result', LIST, hint)
