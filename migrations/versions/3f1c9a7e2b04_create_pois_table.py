"""Create pois table with PostGIS point geometry

Revision ID: 3f1c9a7e2b04
Revises:
Create Date: 2026-10-12 10:14:52.318204

"""
from alembic import op
import sqlalchemy as sa
import geoalchemy2
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '3f1c9a7e2b04'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute('CREATE EXTENSION IF NOT EXISTS postgis')

    op.create_table('pois',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('location', geoalchemy2.types.Geometry(
            geometry_type='POINT',
            srid=4326,
            from_text='ST_GeomFromEWKT',
            name='geometry',
            spatial_index=False
        ), nullable=True),
        sa.Column('tags', postgresql.JSONB(astext_type=sa.Text()), nullable=False,
                  server_default=sa.text("'[]'::jsonb")),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_pois_created_at', 'pois', ['created_at'], unique=False)
    op.create_index('idx_pois_location', 'pois', ['location'], unique=False,
                    postgresql_using='gist')


def downgrade():
    # Note: the postgis extension is left installed
    op.drop_index('idx_pois_location', table_name='pois', postgresql_using='gist')
    op.drop_index('ix_pois_created_at', table_name='pois')
    op.drop_table('pois')
