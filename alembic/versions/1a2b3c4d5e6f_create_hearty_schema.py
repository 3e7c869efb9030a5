"""create hearty schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 10:12:41.218004

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLModel stores enum members by name
user_type = sa.Enum('VOLUNTEER', 'BUSINESS_PARTNER', 'CARE_FACILITY_NGO', name='usertype')
verification_status = sa.Enum(
    'NOT_VERIFIED', 'IN_VERIFICATION', 'VERIFIED', 'REJECTED', name='verificationstatus'
)
access_level = sa.Enum('READ_ONLY', 'FULL_ACCESS', name='accesslevel')
relation_status = sa.Enum('PENDING', 'INVITED', 'ACTIVE', 'RELEASED', name='relationstatus')
invitation_type = sa.Enum('PARTNER_INVITE', 'VOLUNTEER_REQUEST', name='invitationtype')
favorite_item_type = sa.Enum('URGENT_NEED', 'EVENT', name='favoriteitemtype')
processing_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='processingstatus')
organisation_type = sa.Enum(
    'NGO_ORGANISATION', 'CARE_FACILITY', 'TEACHER', 'SCHOOL', 'OTHER', name='organisationtype'
)
application_status = sa.Enum(
    'IN_APPLICATION', 'IN_PROGRESS', 'COMPLETED', name='applicationstatus'
)
membership_status = sa.Enum('ACTIVE', 'INACTIVE', name='membershipstatus')
assignment_status = sa.Enum('ASSIGNED', 'IN_PROGRESS', 'COMPLETED', name='assignmentstatus')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'admins',
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('id_admin', sa.Integer(), nullable=False),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.PrimaryKeyConstraint('id_admin')
    )
    op.create_index(op.f('ix_admins_email'), 'admins', ['email'], unique=True)
    op.create_index(op.f('ix_admins_username'), 'admins', ['username'], unique=True)

    op.create_table(
        'user_profiles',
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('bio', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('interests', sa.JSON(), nullable=True),
        sa.Column('avatar_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('user_type', user_type, nullable=False),
        sa.Column('verification_status', verification_status, nullable=False),
        sa.Column('access_level', access_level, nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id_user')
    )
    op.create_index(op.f('ix_user_profiles_email'), 'user_profiles', ['email'], unique=True)
    op.create_index(op.f('ix_user_profiles_full_name'), 'user_profiles', ['full_name'], unique=False)
    op.create_index(op.f('ix_user_profiles_user_type'), 'user_profiles', ['user_type'], unique=False)

    op.create_table(
        'volunteer_business_partner_relations',
        sa.Column('id_volunteer', sa.Integer(), nullable=False),
        sa.Column('id_partner', sa.Integer(), nullable=False),
        sa.Column('status', relation_status, nullable=False),
        sa.Column('invitation_type', invitation_type, nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=True),
        sa.Column('released_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column('id_relation', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_partner'], ['user_profiles.id_user']),
        sa.ForeignKeyConstraint(['id_volunteer'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_relation'),
        sa.UniqueConstraint('id_volunteer', 'id_partner', name='uq_volunteer_partner')
    )
    op.create_index(op.f('ix_volunteer_business_partner_relations_id_partner'), 'volunteer_business_partner_relations', ['id_partner'], unique=False)
    op.create_index(op.f('ix_volunteer_business_partner_relations_id_volunteer'), 'volunteer_business_partner_relations', ['id_volunteer'], unique=False)
    op.create_index(op.f('ix_volunteer_business_partner_relations_status'), 'volunteer_business_partner_relations', ['status'], unique=False)

    op.create_table(
        'user_activities',
        sa.Column('activity_type', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column('points_earned', sa.Integer(), nullable=False),
        sa.Column('id_activity', sa.Integer(), nullable=False),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_user'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_activity')
    )
    op.create_index(op.f('ix_user_activities_id_user'), 'user_activities', ['id_user'], unique=False)

    op.create_table(
        'opportunities',
        sa.Column('id_opportunity', sa.Integer(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id_opportunity')
    )
    op.create_table(
        'events',
        sa.Column('id_event', sa.Integer(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id_event')
    )
    op.create_table(
        'assigned_opportunities',
        sa.Column('opportunity_title', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('status', assignment_status, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('id_assignment', sa.Integer(), nullable=False),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_user'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_assignment')
    )
    op.create_index(op.f('ix_assigned_opportunities_id_user'), 'assigned_opportunities', ['id_user'], unique=False)

    op.create_table(
        'favorites',
        sa.Column('id_favorite', sa.Integer(), nullable=False),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('item_type', favorite_item_type, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_user'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_favorite'),
        sa.UniqueConstraint('id_user', 'item_id', 'item_type', name='uq_favorite_item')
    )
    op.create_index(op.f('ix_favorites_id_user'), 'favorites', ['id_user'], unique=False)

    op.create_table(
        'business_partner_registrations',
        sa.Column('company_name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('date_of_establishment', sa.Date(), nullable=False),
        sa.Column('business_profile', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('nip', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('contact_person', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('id_registration', sa.Integer(), nullable=False),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('status', processing_status, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_user'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_registration')
    )
    op.create_index(op.f('ix_business_partner_registrations_id_user'), 'business_partner_registrations', ['id_user'], unique=False)

    op.create_table(
        'care_facility_registrations',
        sa.Column('organisation_type', organisation_type, nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('date_of_establishment', sa.Date(), nullable=False),
        sa.Column('business_profile', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column('detailed_description', sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('secondary_address', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('krs', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('id_registration', sa.Integer(), nullable=False),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('status', processing_status, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_user'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_registration')
    )
    op.create_index(op.f('ix_care_facility_registrations_id_user'), 'care_facility_registrations', ['id_user'], unique=False)

    op.create_table(
        'care_facility_documents',
        sa.Column('id_document', sa.Integer(), nullable=False),
        sa.Column('id_registration', sa.Integer(), nullable=False),
        sa.Column('document_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('file_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('file_url', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_registration'], ['care_facility_registrations.id_registration']),
        sa.PrimaryKeyConstraint('id_document')
    )
    op.create_index(op.f('ix_care_facility_documents_id_registration'), 'care_facility_documents', ['id_registration'], unique=False)

    op.create_table(
        'idea_submissions',
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column('category', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('id_idea', sa.Integer(), nullable=False),
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('status', processing_status, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_user'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_idea')
    )
    op.create_index(op.f('ix_idea_submissions_id_user'), 'idea_submissions', ['id_user'], unique=False)

    op.create_table(
        'organisation_applications',
        sa.Column('id_application', sa.Integer(), nullable=False),
        sa.Column('id_organisation', sa.Integer(), nullable=False),
        sa.Column('applicant_name', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=False),
        sa.Column('status', application_status, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_organisation'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_application')
    )
    op.create_index(op.f('ix_organisation_applications_id_organisation'), 'organisation_applications', ['id_organisation'], unique=False)

    op.create_table(
        'organisation_volunteers',
        sa.Column('id_membership', sa.Integer(), nullable=False),
        sa.Column('id_organisation', sa.Integer(), nullable=False),
        sa.Column('id_volunteer', sa.Integer(), nullable=False),
        sa.Column('status', membership_status, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_organisation'], ['user_profiles.id_user']),
        sa.ForeignKeyConstraint(['id_volunteer'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_membership')
    )
    op.create_index(op.f('ix_organisation_volunteers_id_organisation'), 'organisation_volunteers', ['id_organisation'], unique=False)

    op.create_table(
        'organisation_activities_log',
        sa.Column('activity_type', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column('id_activity', sa.Integer(), nullable=False),
        sa.Column('id_organisation', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_organisation'], ['user_profiles.id_user']),
        sa.PrimaryKeyConstraint('id_activity')
    )
    op.create_index(op.f('ix_organisation_activities_log_id_organisation'), 'organisation_activities_log', ['id_organisation'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'organisation_activities_log',
        'organisation_volunteers',
        'organisation_applications',
        'idea_submissions',
        'care_facility_documents',
        'care_facility_registrations',
        'business_partner_registrations',
        'favorites',
        'assigned_opportunities',
        'events',
        'opportunities',
        'user_activities',
        'volunteer_business_partner_relations',
        'user_profiles',
        'admins',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in (
        assignment_status,
        membership_status,
        application_status,
        organisation_type,
        processing_status,
        favorite_item_type,
        invitation_type,
        relation_status,
        access_level,
        verification_status,
        user_type,
    ):
        enum.drop(bind, checkfirst=True)
