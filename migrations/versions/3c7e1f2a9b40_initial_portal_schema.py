"""Initial portal schema: users, profiles, clinical records and messages

Revision ID: 3c7e1f2a9b40
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7e1f2a9b40'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return (
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index('ix_users_email', ['email'], unique=True)
        batch_op.create_index('ix_users_role', ['role'], unique=False)
        batch_op.create_index('ix_users_is_active', ['is_active'], unique=False)

    op.create_table(
        'patients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(length=100), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(length=20), nullable=True),
        sa.Column('blood_type', sa.String(length=5), nullable=True),
        sa.Column('allergies', sa.Text(), nullable=True),
        sa.Column('medical_conditions', sa.Text(), nullable=True),
        sa.Column('insurance_provider', sa.String(length=100), nullable=True),
        sa.Column('insurance_policy_number', sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_patients_user_id', 'patients', ['user_id'], unique=True)

    op.create_table(
        'doctors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('specialization', sa.String(length=100), nullable=False),
        sa.Column('license_number', sa.String(length=20), nullable=False, unique=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('years_experience', sa.Integer(), nullable=True),
        sa.Column('education', sa.Text(), nullable=True),
        sa.Column('consultation_fee', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('availability', sa.Text(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_doctors_user_id', 'doctors', ['user_id'], unique=True)
    op.create_index('ix_doctors_specialization', 'doctors', ['specialization'], unique=False)

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('patients.id'), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('doctors.id'), nullable=False),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.String(length=8), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='scheduled'),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.create_index('ix_appointments_patient_id', ['patient_id'], unique=False)
        batch_op.create_index('ix_appointments_doctor_id', ['doctor_id'], unique=False)
        batch_op.create_index('ix_appointments_appointment_date', ['appointment_date'], unique=False)
        batch_op.create_index('ix_appointments_status', ['status'], unique=False)

    op.create_table(
        'medical_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('patients.id'), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('doctors.id'), nullable=False),
        sa.Column('appointment_id', sa.Integer(), sa.ForeignKey('appointments.id'), nullable=True),
        sa.Column('record_type', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('treatment_plan', sa.Text(), nullable=True),
        sa.Column('file_path', sa.String(length=500), nullable=True),
        sa.Column('record_date', sa.Date(), nullable=False),
        *_timestamps(),
    )
    with op.batch_alter_table('medical_records', schema=None) as batch_op:
        batch_op.create_index('ix_medical_records_patient_id', ['patient_id'], unique=False)
        batch_op.create_index('ix_medical_records_doctor_id', ['doctor_id'], unique=False)
        batch_op.create_index('ix_medical_records_record_date', ['record_date'], unique=False)

    op.create_table(
        'prescriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('medical_record_id', sa.Integer(), sa.ForeignKey('medical_records.id'), nullable=False),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('patients.id'), nullable=False),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('doctors.id'), nullable=False),
        sa.Column('medication_name', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=100), nullable=False),
        sa.Column('frequency', sa.String(length=100), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('prescribed_date', sa.Date(), nullable=False),
        *_timestamps(),
    )
    with op.batch_alter_table('prescriptions', schema=None) as batch_op:
        batch_op.create_index('ix_prescriptions_medical_record_id', ['medical_record_id'], unique=False)
        batch_op.create_index('ix_prescriptions_patient_id', ['patient_id'], unique=False)
        batch_op.create_index('ix_prescriptions_doctor_id', ['doctor_id'], unique=False)
        batch_op.create_index('ix_prescriptions_prescribed_date', ['prescribed_date'], unique=False)

    op.create_table(
        'lab_results',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('medical_record_id', sa.Integer(), sa.ForeignKey('medical_records.id'), nullable=False),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('patients.id'), nullable=False),
        sa.Column('test_name', sa.String(length=255), nullable=False),
        sa.Column('test_type', sa.String(length=100), nullable=True),
        sa.Column('result_value', sa.String(length=255), nullable=True),
        sa.Column('reference_range', sa.String(length=100), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('test_date', sa.Date(), nullable=False),
        sa.Column('lab_technician', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    with op.batch_alter_table('lab_results', schema=None) as batch_op:
        batch_op.create_index('ix_lab_results_medical_record_id', ['medical_record_id'], unique=False)
        batch_op.create_index('ix_lab_results_patient_id', ['patient_id'], unique=False)
        batch_op.create_index('ix_lab_results_test_date', ['test_date'], unique=False)

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('recipient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sent_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('messages', schema=None) as batch_op:
        batch_op.create_index('ix_messages_sender_id', ['sender_id'], unique=False)
        batch_op.create_index('ix_messages_recipient_id', ['recipient_id'], unique=False)
        batch_op.create_index('ix_messages_sent_at', ['sent_at'], unique=False)


def downgrade():
    for table in (
        'messages',
        'lab_results',
        'prescriptions',
        'medical_records',
        'appointments',
        'doctors',
        'patients',
        'users',
    ):
        op.drop_table(table)
