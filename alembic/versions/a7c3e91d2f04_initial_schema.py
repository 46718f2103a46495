"""initial_schema

Revision ID: a7c3e91d2f04
Revises:
Create Date: 2025-11-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a7c3e91d2f04'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('seating', sa.Text(), nullable=True),
        sa.Column('presentation', sa.Boolean(), nullable=False),
        sa.Column('image', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rooms_name', 'rooms', ['name'])

    op.create_table(
        'meetings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('wing_id', sa.Integer(), nullable=True),
        sa.Column('subw_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_meetings_user_id', 'meetings', ['user_id'])
    op.create_index('idx_meetings_room_window', 'meetings', ['room_id', 'start_time', 'end_time'])

    op.create_table(
        'meeting_statuses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('meeting_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('approved_by', sa.Integer(), nullable=True),
        sa.Column('declined_by', sa.Integer(), nullable=True),
        sa.Column('decline_reason', sa.Text(), nullable=True),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['meeting_id'], ['meetings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_meeting_statuses_meeting', 'meeting_statuses', ['meeting_id', 'changed_at'])

    op.create_table(
        'meeting_attendees',
        sa.Column('meeting_id', sa.Integer(), nullable=False),
        sa.Column('attendant_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['meeting_id'], ['meetings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('meeting_id', 'attendant_id'),
    )

    op.create_table(
        'sops',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('version', sa.String(length=20), nullable=True),
        sa.Column('file_url', sa.String(length=500), nullable=True),
        sa.Column('wing_id', sa.Integer(), nullable=True),
        sa.Column('subw_id', sa.Integer(), nullable=True),
        sa.Column('visibility', sa.String(length=20), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sops_wing_id', 'sops', ['wing_id'])
    op.create_index('ix_sops_subw_id', 'sops', ['subw_id'])

    op.create_table(
        'sop_files',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sop_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('file_url', sa.String(length=500), nullable=False),
        sa.Column('version', sa.String(length=20), nullable=False),
        sa.Column('timestamp', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['sop_id'], ['sops.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_sop_files_sop', 'sop_files', ['sop_id', 'timestamp'])

    op.create_table(
        'helpdesk_tickets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('assigned_by', sa.Integer(), nullable=True),
        sa.Column('assigned_to', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('priority', sa.String(length=20), nullable=False),
        sa.Column('request_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_update_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('resolve_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('trashed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_helpdesk_tickets_user_id', 'helpdesk_tickets', ['user_id'])
    op.create_index('ix_helpdesk_tickets_assigned_to', 'helpdesk_tickets', ['assigned_to'])
    op.create_index('idx_helpdesk_tickets_live', 'helpdesk_tickets', ['deleted_at', 'trashed_at'])

    op.create_table(
        'ticket_assignments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ticket_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('assigned_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['ticket_id'], ['helpdesk_tickets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ticket_id', 'user_id', name='uq_ticket_user'),
    )
    op.create_index('idx_ticket_assignments_ticket', 'ticket_assignments', ['ticket_id'])


def downgrade():
    op.drop_index('idx_ticket_assignments_ticket', table_name='ticket_assignments')
    op.drop_table('ticket_assignments')
    op.drop_index('idx_helpdesk_tickets_live', table_name='helpdesk_tickets')
    op.drop_index('ix_helpdesk_tickets_assigned_to', table_name='helpdesk_tickets')
    op.drop_index('ix_helpdesk_tickets_user_id', table_name='helpdesk_tickets')
    op.drop_table('helpdesk_tickets')
    op.drop_index('idx_sop_files_sop', table_name='sop_files')
    op.drop_table('sop_files')
    op.drop_index('ix_sops_subw_id', table_name='sops')
    op.drop_index('ix_sops_wing_id', table_name='sops')
    op.drop_table('sops')
    op.drop_table('meeting_attendees')
    op.drop_index('idx_meeting_statuses_meeting', table_name='meeting_statuses')
    op.drop_table('meeting_statuses')
    op.drop_index('idx_meetings_room_window', table_name='meetings')
    op.drop_index('ix_meetings_user_id', table_name='meetings')
    op.drop_table('meetings')
    op.drop_index('ix_rooms_name', table_name='rooms')
    op.drop_table('rooms')
