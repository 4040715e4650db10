"""create domain search tables

Revision ID: 4d1e7a2b9c30
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4d1e7a2b9c30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'domains',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('domain', sa.String(), nullable=False),
        sa.Column('company_name', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('country', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('zip_code', sa.String(), nullable=True),
        sa.Column('social_links', sa.Text(), nullable=True),
        sa.Column('emails', sa.Text(), nullable=True),
        sa.Column('phones', sa.Text(), nullable=True),
        sa.Column('people', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('domain')
    )
    op.create_index(op.f('ix_domains_category'), 'domains', ['category'], unique=False)
    op.create_index(op.f('ix_domains_country'), 'domains', ['country'], unique=False)

    op.create_table(
        'technologies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('is_premium', sa.String(length=8), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('parent', sa.String(), nullable=True),
        sa.Column('link', sa.String(), nullable=True),
        sa.Column('trends_link', sa.String(), nullable=True),
        sa.Column('sub_categories', sa.Text(), nullable=True),
        sa.Column('first_added', sa.DateTime(), nullable=True),
        sa.Column('ticker', sa.String(), nullable=True),
        sa.Column('exchange', sa.String(), nullable=True),
        sa.Column('public_company_type', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("is_premium IN ('Yes', 'No', 'Maybe')", name='ck_technologies_is_premium'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index(op.f('ix_technologies_category'), 'technologies', ['category'], unique=False)

    op.create_table(
        'domain_technologies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('domain_id', sa.Integer(), nullable=False),
        sa.Column('domain_name', sa.String(), nullable=False),
        sa.Column('technology_id', sa.Integer(), nullable=False),
        sa.Column('technology_name', sa.String(), nullable=False),
        sa.Column('spend', sa.Float(), nullable=True),
        sa.Column('subdomain', sa.Boolean(), nullable=True),
        sa.Column('first_identified', sa.DateTime(), nullable=True),
        sa.Column('last_identified', sa.DateTime(), nullable=True),
        sa.Column('first_detected', sa.DateTime(), nullable=True),
        sa.Column('last_detected', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['domain_id'], ['domains.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['technology_id'], ['technologies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('domain_id', 'technology_id', name='uq_domain_technology')
    )
    op.create_index(op.f('ix_domain_technologies_domain_id'), 'domain_technologies', ['domain_id'], unique=False)
    op.create_index(op.f('ix_domain_technologies_technology_id'), 'domain_technologies', ['technology_id'], unique=False)
    op.create_index(op.f('ix_domain_technologies_technology_name'), 'domain_technologies', ['technology_name'], unique=False)

    op.create_table(
        'domain_stats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('domain_id', sa.Integer(), nullable=False),
        sa.Column('total_technologies', sa.Integer(), nullable=False),
        sa.Column('technologies_by_category', sa.JSON(), nullable=True),
        sa.Column('total_spend', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['domain_id'], ['domains.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('domain_id')
    )


def downgrade() -> None:
    op.drop_table('domain_stats')
    op.drop_index(op.f('ix_domain_technologies_technology_name'), table_name='domain_technologies')
    op.drop_index(op.f('ix_domain_technologies_technology_id'), table_name='domain_technologies')
    op.drop_index(op.f('ix_domain_technologies_domain_id'), table_name='domain_technologies')
    op.drop_table('domain_technologies')
    op.drop_index(op.f('ix_technologies_category'), table_name='technologies')
    op.drop_table('technologies')
    op.drop_index(op.f('ix_domains_country'), table_name='domains')
    op.drop_index(op.f('ix_domains_category'), table_name='domains')
    op.drop_table('domains')
