"""
Create the booking schema.

- Tenants: companies, vendors and their administrator users
- Catalogue and workflow: event_items and events
- Auth and audit: revoked_tokens and audit_logs
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = 'booking_initial_20250101'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('contact_phone', sa.String(length=50), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'vendors',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('contact_phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=True),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("role in ('HR_ADMIN','VENDOR_ADMIN')", name='ck_users_role'),
        sa.CheckConstraint(
            "(role = 'HR_ADMIN' AND company_id IS NOT NULL AND vendor_id IS NULL) OR "
            "(role = 'VENDOR_ADMIN' AND vendor_id IS NOT NULL AND company_id IS NULL)",
            name='ck_users_tenant',
        ),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'event_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_event_items_vendor_id_created_at', 'event_items', ['vendor_id', 'created_at'])

    op.create_table(
        'events',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('event_item_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('event_items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('proposed_dates', postgresql.JSONB(), nullable=False),
        sa.Column('location_postal_code', sa.String(length=20), nullable=False),
        sa.Column('location_street_name', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('confirmed_date', sa.Date(), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_modified', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("status in ('Pending','Approved','Rejected')", name='ck_events_status'),
    )
    op.create_index('ix_events_company_id_date_created', 'events', ['company_id', 'date_created'])
    op.create_index('ix_events_vendor_id_date_created', 'events', ['vendor_id', 'date_created'])
    op.create_index('ix_events_event_item_id_status', 'events', ['event_item_id', 'status'])

    op.create_table(
        'revoked_tokens',
        sa.Column('jti', sa.String(length=64), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token_type', sa.String(length=10), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_revoked_tokens_user_id', 'revoked_tokens', ['user_id'])
    op.create_index('idx_revoked_tokens_expires_at', 'revoked_tokens', ['expires_at'])

    op.create_table(
        'audit_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('actor_user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='SET NULL'), nullable=True),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='SET NULL'), nullable=True),
        sa.Column('action_type', sa.Text(), nullable=False),
        sa.Column('target_type', sa.Text(), nullable=True),
        sa.Column('target_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_audit_logs_target_type_target_id', 'audit_logs', ['target_type', 'target_id'])
    op.create_index('ix_audit_logs_actor_user_id_created_at', 'audit_logs', ['actor_user_id', 'created_at'])
    op.create_index('ix_audit_logs_action_type', 'audit_logs', ['action_type'])


def downgrade() -> None:
    op.drop_index('ix_audit_logs_action_type', table_name='audit_logs')
    op.drop_index('ix_audit_logs_actor_user_id_created_at', table_name='audit_logs')
    op.drop_index('ix_audit_logs_target_type_target_id', table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index('idx_revoked_tokens_expires_at', table_name='revoked_tokens')
    op.drop_index('idx_revoked_tokens_user_id', table_name='revoked_tokens')
    op.drop_table('revoked_tokens')
    op.drop_index('ix_events_event_item_id_status', table_name='events')
    op.drop_index('ix_events_vendor_id_date_created', table_name='events')
    op.drop_index('ix_events_company_id_date_created', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_event_items_vendor_id_created_at', table_name='event_items')
    op.drop_table('event_items')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_table('vendors')
    op.drop_table('companies')
