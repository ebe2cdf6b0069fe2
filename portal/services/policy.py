"""
Authorization policy.

``decide(caller, resource, action, hint)`` is a pure function of its inputs:
role first, then ownership. Listings for non-privileged callers come back as
AllowWithForcedFilter so the narrowing happens inside the query instead of
after it; routes never re-implement these checks.
"""
from dataclasses import dataclass, field

from portal.errors import AuthorizationError

CREATE = 'create'
READ = 'read'
UPDATE = 'update'
DELETE = 'delete'
LIST = 'list'

CLINICAL = ('appointment', 'medical_record', 'prescription', 'lab_result')


@dataclass(frozen=True)
class Caller:
    user_id: int
    role: str
    patient_id: int = None
    doctor_id: int = None
    email: str = None

    @property
    def is_admin(self):
        return self.role == 'admin'


@dataclass(frozen=True)
class ResourceHint:
    """What the caller is acting on, as far as ownership is concerned."""
    owner_user_id: int = None
    patient_id: int = None
    doctor_id: int = None
    sender_id: int = None
    recipient_id: int = None


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class Deny:
    reason: str


@dataclass(frozen=True)
class AllowWithForcedFilter:
    filters: dict = field(default_factory=dict)


ALLOW = Allow()


def decide(caller, resource, action, hint=None):
    hint = hint or ResourceHint()

    # Mailboxes and read receipts follow identity, whatever the role.
    if resource == 'message':
        decision = _message(caller, action, hint)
        if decision is not None:
            return decision

    if caller.is_admin:
        return ALLOW

    if resource == 'user':
        return _self_only(caller, hint, 'You can only view your own account')
    if resource == 'patient':
        return _patient_profile(caller, action, hint)
    if resource == 'doctor':
        return _doctor_profile(caller, action, hint)
    if resource in CLINICAL:
        return _clinical(caller, resource, action, hint)
    if resource == 'message':
        return _message_party(caller, hint)
    return Deny(f'No policy for {resource}')


def enforce(caller, resource, action, hint=None):
    """Raise AuthorizationError on Deny; return the forced filters (possibly empty)."""
    decision = decide(caller, resource, action, hint)
    if isinstance(decision, Deny):
        raise AuthorizationError(decision.reason)
    if isinstance(decision, AllowWithForcedFilter):
        return dict(decision.filters)
    return {}


def _self_only(caller, hint, reason):
    if hint.owner_user_id == caller.user_id:
        return ALLOW
    return Deny(reason)


def _patient_profile(caller, action, hint):
    if action == LIST:
        if caller.role == 'doctor':
            return ALLOW
        return Deny('Access denied. Insufficient permissions')
    if caller.role == 'patient':
        verb = {CREATE: 'create', READ: 'view', UPDATE: 'update', DELETE: 'delete'}[action]
        return _self_only(caller, hint, f'You can only {verb} your own patient profile')
    if caller.role == 'doctor' and action == READ:
        return ALLOW
    return Deny('Access denied. Insufficient permissions')


def _doctor_profile(caller, action, hint):
    # The directory is readable by any authenticated caller
    if action in (READ, LIST):
        return ALLOW
    if action == UPDATE and caller.role == 'doctor':
        return _self_only(caller, hint, 'You can only update your own doctor profile')
    if action == CREATE:
        return Deny('Only admin users can create doctor profiles')
    if action == DELETE:
        return Deny('Only admin can delete doctor profiles')
    return Deny('Access denied. Insufficient permissions')


def _clinical(caller, resource, action, hint):
    if caller.role == 'patient':
        if caller.patient_id is None:
            return Deny('No patient profile is linked to this account')
        if hint.patient_id is not None and hint.patient_id != caller.patient_id:
            return Deny('Access denied. You can only access your own records')
        if action == LIST:
            return AllowWithForcedFilter({'patient_id': caller.patient_id})
        if action == READ:
            return ALLOW
        # Patients book, reschedule and cancel their own appointments only
        if resource == 'appointment':
            return ALLOW
        return Deny('Only doctors can modify clinical records')

    if caller.role == 'doctor':
        if caller.doctor_id is None:
            return Deny('No doctor profile is linked to this account')
        if hint.doctor_id is not None and hint.doctor_id != caller.doctor_id:
            return Deny('Access denied. You can only access records you are responsible for')
        if action == LIST:
            return AllowWithForcedFilter({'doctor_id': caller.doctor_id})
        return ALLOW

    return Deny('Access denied. Insufficient permissions')


def _message(caller, action, hint):
    if action == LIST:
        return AllowWithForcedFilter({'user_id': caller.user_id})
    if action == CREATE:
        return AllowWithForcedFilter({'sender_id': caller.user_id})
    if action == UPDATE:
        if hint.recipient_id == caller.user_id:
            return ALLOW
        return Deny('Only the recipient can mark a message as read')
    return None


def _message_party(caller, hint):
    if caller.user_id in (hint.sender_id, hint.recipient_id):
        return ALLOW
    return Deny('Access denied. You are not a party to this message')
