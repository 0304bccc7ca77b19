"""create doctors, services, patients and appointments

Revision ID: 0001_create_collections
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_create_collections'
down_revision = None
branch_labels = None
depends_on = None

TIME_SLOTS = ('09:00', '10:00', '11:00', '14:00', '15:00', '16:00', '17:00')
APPOINTMENT_STATUSES = ('pending', 'confirmed', 'cancelled', 'completed')


def _record_columns() -> list:
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'doctors',
        *_record_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('specialty', sa.String(100), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('reviews', sa.Integer(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('education', sa.Text(), nullable=False),
        sa.Column('email', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('image', sa.String(500), nullable=False),
    )
    op.create_index('ix_doctors_department', 'doctors', ['department'])

    op.create_table(
        'services',
        *_record_columns(),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('duration', sa.String(50), nullable=False),
        sa.Column('image', sa.String(500), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_services_department', 'services', ['department'])

    op.create_table(
        'patients',
        *_record_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(20), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('emergency_contact', sa.String(200), nullable=False),
        sa.Column('medical_history', sa.JSON(), nullable=False),
    )

    op.create_table(
        'appointments',
        *_record_columns(),
        sa.Column('patient_name', sa.String(100), nullable=False),
        sa.Column('patient_email', sa.String(200), nullable=False),
        sa.Column('patient_phone', sa.String(50), nullable=False),
        sa.Column('doctor_id', sa.String(36), nullable=True),
        sa.Column('doctor_name', sa.String(100), nullable=False),
        sa.Column('service_id', sa.String(36), nullable=True),
        sa.Column('service_name', sa.String(150), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Enum(*TIME_SLOTS, name='time_slot'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.Enum(*APPOINTMENT_STATUSES, name='appointment_status'), nullable=False),
    )
    op.create_index('ix_appointments_doctor_id', 'appointments', ['doctor_id'])


def downgrade() -> None:
    op.drop_index('ix_appointments_doctor_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('patients')
    op.drop_index('ix_services_department', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_doctors_department', table_name='doctors')
    op.drop_table('doctors')
    sa.Enum(name='appointment_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='time_slot').drop(op.get_bind(), checkfirst=True)
