"""
Declarative query shapes, one per listable resource.

Each spec names the columns and joins to read, which optional filters exist
and the SQL predicate each one contributes, and a fixed ordering. Filters are
applied in declaration order so placeholder numbering is deterministic.
"""
from dataclasses import dataclass, field

from sqlalchemy import Boolean, Date, Integer

from .builder import SelectQuery, like_pattern


@dataclass(frozen=True)
class Filter:
    template: str
    type_: object = None
    transform: object = None


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    columns: str
    source: str
    key: str
    filters: dict = field(default_factory=dict)
    order_by: tuple = ()
    # Applied to every read, single-row lookups included
    visibility: tuple = ()
    # Applied to listings only
    listing: tuple = ()
    # Driver-neutral coercions for values the store may return loosely typed
    casts: dict = field(default_factory=dict)


def build_list_query(spec, options):
    """SelectQuery for ``spec`` narrowed by ``options``.

    A forced filter ``spec`` has no predicate for is a programming error, never a
    silently dropped constraint.
    """
    values = options.effective_filters()
    unknown = set(options.forced) - set(spec.filters)
    if unknown:
        raise ValueError(f"{spec.name} cannot enforce filters: {', '.join(sorted(unknown))}")

    query = SelectQuery(spec.columns, spec.source, spec.visibility + spec.listing)
    for name, flt in spec.filters.items():
        value = values.get(name)
        if value is None or value == '':
            continue
        if flt.transform is not None:
            value = flt.transform(value)
            if value is None:
                continue
        query.where(flt.template, value, type_=flt.type_)
    return query.order(*spec.order_by)


def build_lookup_query(spec, value, column=None):
    query = SelectQuery(spec.columns, spec.source, spec.visibility)
    return query.where(f'{column or spec.key} = {{0}}', value, type_=Integer())


def _search(*columns):
    return Filter(
        '(' + ' OR '.join(f"LOWER({c}) LIKE {{0}} ESCAPE '!'" for c in columns) + ')',
        transform=like_pattern,
    )


def _date_range(column):
    return (
        Filter(f'{column} >= {{0}}', type_=Date()),
        Filter(f'{column} <= {{0}}', type_=Date()),
    )


PROFILE_CASTS = {'is_active': bool, 'is_verified': bool}

USERS = ResourceSpec(
    name='user',
    columns='u.id, u.email, u.role, u.first_name, u.last_name, u.is_verified, u.is_active, u.created_at, u.updated_at',
    source='users u',
    key='u.id',
    filters={'role': Filter('u.role = {0}')},
    order_by=('u.created_at DESC', 'u.id DESC'),
    listing=('u.is_active = TRUE',),
    casts=PROFILE_CASTS,
)

PATIENTS = ResourceSpec(
    name='patient',
    columns='p.*, u.first_name, u.last_name, u.email, u.role, u.is_active',
    source='patients p JOIN users u ON p.user_id = u.id',
    key='p.id',
    filters={'search': _search('u.first_name', 'u.last_name', 'u.email')},
    order_by=('p.created_at DESC', 'p.id DESC'),
    listing=('u.is_active = TRUE',),
    casts=PROFILE_CASTS,
)

DOCTORS = ResourceSpec(
    name='doctor',
    columns='d.*, u.first_name, u.last_name, u.email, u.role, u.is_active',
    source='doctors d JOIN users u ON d.user_id = u.id',
    key='d.id',
    filters={
        'search': _search('u.first_name', 'u.last_name', 'd.specialization'),
        'specialization': _search('d.specialization'),
        'is_available': Filter('d.is_available = {0}', type_=Boolean()),
    },
    order_by=('d.created_at DESC', 'd.id DESC'),
    visibility=('u.is_active = TRUE',),
    casts={**PROFILE_CASTS, 'is_available': bool, 'consultation_fee': float},
)

DOCTORS_BY_SPECIALTY = ResourceSpec(
    name='doctor',
    columns=DOCTORS.columns,
    source=DOCTORS.source,
    key=DOCTORS.key,
    filters={'specialization': _search('d.specialization')},
    order_by=('COALESCE(d.years_experience, 0) DESC', 'd.created_at DESC', 'd.id DESC'),
    visibility=DOCTORS.visibility,
    listing=('d.is_available = TRUE',),
    casts=DOCTORS.casts,
)

_appointment_from, _appointment_to = _date_range('a.appointment_date')

APPOINTMENTS = ResourceSpec(
    name='appointment',
    columns='a.*, p.user_id AS patient_user_id, d.user_id AS doctor_user_id',
    source=(
        'appointments a '
        'LEFT JOIN patients p ON a.patient_id = p.id '
        'LEFT JOIN doctors d ON a.doctor_id = d.id'
    ),
    key='a.id',
    filters={
        'patient_id': Filter('a.patient_id = {0}', type_=Integer()),
        'doctor_id': Filter('a.doctor_id = {0}', type_=Integer()),
        'status': Filter('a.status = {0}'),
        'date_from': _appointment_from,
        'date_to': _appointment_to,
    },
    order_by=('a.appointment_date DESC', 'a.appointment_time DESC', 'a.created_at DESC', 'a.id DESC'),
)

_record_from, _record_to = _date_range('mr.record_date')

MEDICAL_RECORDS = ResourceSpec(
    name='medical record',
    columns='mr.*',
    source='medical_records mr',
    key='mr.id',
    filters={
        'patient_id': Filter('mr.patient_id = {0}', type_=Integer()),
        'doctor_id': Filter('mr.doctor_id = {0}', type_=Integer()),
        'record_type': Filter('mr.record_type = {0}'),
        'date_from': _record_from,
        'date_to': _record_to,
    },
    order_by=('mr.record_date DESC', 'mr.created_at DESC', 'mr.id DESC'),
)

PRESCRIPTIONS = ResourceSpec(
    name='prescription',
    columns='rx.*',
    source='prescriptions rx',
    key='rx.id',
    filters={
        'patient_id': Filter('rx.patient_id = {0}', type_=Integer()),
        'doctor_id': Filter('rx.doctor_id = {0}', type_=Integer()),
        'medical_record_id': Filter('rx.medical_record_id = {0}', type_=Integer()),
        'status': Filter('rx.status = {0}'),
    },
    order_by=('rx.prescribed_date DESC', 'rx.created_at DESC', 'rx.id DESC'),
)

# Lab results carry no doctor column; the prescribing doctor is the author
# of the anchoring medical record.
LAB_RESULTS = ResourceSpec(
    name='lab result',
    columns='lr.*, mr.doctor_id AS doctor_id',
    source='lab_results lr LEFT JOIN medical_records mr ON lr.medical_record_id = mr.id',
    key='lr.id',
    filters={
        'patient_id': Filter('lr.patient_id = {0}', type_=Integer()),
        'doctor_id': Filter('mr.doctor_id = {0}', type_=Integer()),
        'medical_record_id': Filter('lr.medical_record_id = {0}', type_=Integer()),
        'status': Filter('lr.status = {0}'),
    },
    order_by=('lr.test_date DESC', 'lr.created_at DESC', 'lr.id DESC'),
)

MESSAGE_CASTS = {'is_read': bool}

INBOX = ResourceSpec(
    name='message',
    columns='m.*',
    source='messages m',
    key='m.id',
    filters={
        'user_id': Filter('m.recipient_id = {0}', type_=Integer()),
        'unread_only': Filter('m.is_read = {0}', type_=Boolean(), transform=lambda flag: False if flag else None),
    },
    order_by=('m.sent_at DESC', 'm.id DESC'),
    casts=MESSAGE_CASTS,
)

OUTBOX = ResourceSpec(
    name='message',
    columns='m.*',
    source='messages m',
    key='m.id',
    filters={'user_id': Filter('m.sender_id = {0}', type_=Integer())},
    order_by=('m.sent_at DESC', 'm.id DESC'),
    casts=MESSAGE_CASTS,
)
