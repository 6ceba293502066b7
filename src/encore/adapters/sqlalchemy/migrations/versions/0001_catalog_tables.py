"""Create catalog and ingest job tables.

Revision ID: 0001_catalog_tables
Revises:
Create Date: 2026-10-19 00:00:00

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_catalog_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "artist",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("spotify_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_artist")),
        sa.UniqueConstraint("spotify_id", name=op.f("uq_artist_artist_spotify_id")),
    )
    op.create_table(
        "song",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("spotify_id", sa.String(), nullable=False),
        sa.Column("isrc", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("album_name", sa.String(), nullable=True),
        sa.Column("album_id", sa.String(), nullable=True),
        sa.Column("artist", sa.String(), nullable=False),
        sa.Column("track_number", sa.Integer(), nullable=True),
        sa.Column("disc_number", sa.Integer(), nullable=False),
        sa.Column("album_art_url", sa.String(), nullable=True),
        sa.Column("release_date", sa.String(), nullable=True),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
        sa.Column("popularity", sa.Integer(), nullable=False),
        sa.Column("preview_url", sa.String(), nullable=True),
        sa.Column("spotify_uri", sa.String(), nullable=True),
        sa.Column("external_url", sa.String(), nullable=True),
        sa.Column("is_explicit", sa.Boolean(), nullable=False),
        sa.Column("is_playable", sa.Boolean(), nullable=False),
        sa.Column("is_studio", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_song")),
        sa.UniqueConstraint("spotify_id", name=op.f("uq_song_song_spotify_id")),
    )
    op.create_index("ix_song_isrc", "song", ["isrc"])
    op.create_table(
        "artist_song",
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("song_id", sa.Uuid(), nullable=False),
        sa.Column("is_primary_artist", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name=op.f("fk_artist_song_artist_song_artist_id_artist"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["song_id"],
            ["song.id"],
            name=op.f("fk_artist_song_artist_song_song_id_song"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("artist_id", "song_id", name=op.f("pk_artist_song")),
    )
    op.create_table(
        "ingest_job",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("spotify_id", sa.String(), nullable=False),
        sa.Column("concurrency", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("stage", sa.String(), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("error", sa.String(), nullable=True),
        sa.Column("result", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name=op.f("fk_ingest_job_ingest_job_artist_id_artist"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_ingest_job")),
    )
    op.create_index("ix_ingest_job_status_created_at", "ingest_job", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_ingest_job_status_created_at", table_name="ingest_job")
    op.drop_table("ingest_job")
    op.drop_table("artist_song")
    op.drop_index("ix_song_isrc", table_name="song")
    op.drop_table("song")
    op.drop_table("artist")
