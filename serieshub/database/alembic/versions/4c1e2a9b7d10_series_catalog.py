"""series catalog

Revision ID: 4c1e2a9b7d10
Revises:
Create Date: 2026-10-18 10:12:41.302118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from serieshub.common.settings import get_settings

# revision identifiers, used by Alembic.
revision: str = '4c1e2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_s = get_settings().db_schema
SCHEMA = _s if _s and _s.lower() != 'public' else None


def _fk(table: str) -> str:
    return f'{SCHEMA}.{table}.id' if SCHEMA else f'{table}.id'


def _service_columns():
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('data_origin', sa.Text(), nullable=True),
        sa.Column('meta_data', sa.JSON(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'demography',
        *_service_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_demography')),
        sa.UniqueConstraint('slug', name='uq_demography_slug'),
        schema=SCHEMA
    )
    op.create_table(
        'genre',
        *_service_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_genre')),
        sa.UniqueConstraint('slug', name='uq_genre_slug'),
        schema=SCHEMA
    )
    op.create_table(
        'series',
        *_service_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('chapter_number', sa.Integer(), server_default='0', nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('description_en', sa.Text(), nullable=True),
        sa.Column('qualification', sa.Numeric(precision=4, scale=2), server_default='0', nullable=False),
        sa.Column('demography_id', sa.Integer(), nullable=False),
        sa.Column('visible', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('image', sa.String(length=255), nullable=True),
        sa.Column('rank', sa.Integer(), nullable=True),
        sa.CheckConstraint('qualification >= 0 AND qualification <= 10',
                           name=op.f('ck_series_qualification_range')),
        sa.ForeignKeyConstraint(['demography_id'], [_fk('demography')],
                                name=op.f('fk_series_demography_id_demography'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_series')),
        schema=SCHEMA
    )
    op.create_index('ix_series_year', 'series', ['year'], unique=False, schema=SCHEMA)
    op.create_index('ix_series_demography_id', 'series', ['demography_id'], unique=False, schema=SCHEMA)
    op.create_index('ix_series_name_lower', 'series', [sa.text('lower(name)')], unique=False, schema=SCHEMA)

    op.create_table(
        'series_genre',
        sa.Column('series_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['series_id'], [_fk('series')],
                                name=op.f('fk_series_genre_series_id_series'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['genre_id'], [_fk('genre')],
                                name=op.f('fk_series_genre_genre_id_genre'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('series_id', 'genre_id', name=op.f('pk_series_genre')),
        schema=SCHEMA
    )
    op.create_index('ix_series_genre_genre_id', 'series_genre', ['genre_id'], unique=False, schema=SCHEMA)

    op.create_table(
        'series_title',
        *_service_columns(),
        sa.Column('series_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(['series_id'], [_fk('series')],
                                name=op.f('fk_series_title_series_id_series'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_series_title')),
        schema=SCHEMA
    )
    op.create_index('ix_series_title_series_id', 'series_title', ['series_id'], unique=False, schema=SCHEMA)


def downgrade() -> None:
    op.drop_index('ix_series_title_series_id', table_name='series_title', schema=SCHEMA)
    op.drop_table('series_title', schema=SCHEMA)
    op.drop_index('ix_series_genre_genre_id', table_name='series_genre', schema=SCHEMA)
    op.drop_table('series_genre', schema=SCHEMA)
    op.drop_index('ix_series_name_lower', table_name='series', schema=SCHEMA)
    op.drop_index('ix_series_demography_id', table_name='series', schema=SCHEMA)
    op.drop_index('ix_series_year', table_name='series', schema=SCHEMA)
    op.drop_table('series', schema=SCHEMA)
    op.drop_table('genre', schema=SCHEMA)
    op.drop_table('demography', schema=SCHEMA)
