"""Read-only access to the clip table."""

from __future__ import annotations

import logging

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Engine,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    select,
    text,
)

logger = logging.getLogger(__name__)

CLIP_COLUMNS = (
    "uuid",
    "title",
    "champion",
    "role",
    "category",
    "tags",
    "video_url",
    "thumbnail_url",
    "description",
    "favorite",
    "recorded_at",
)


def clip_table(name: str = "lol_clips", metadata: MetaData | None = None) -> Table:
    """Schema of the clip table, also used to create it for local databases."""
    return Table(
        name,
        metadata or MetaData(),
        Column("uuid", String(64), primary_key=True),
        Column("title", String(255)),
        Column("champion", String(64)),
        Column("role", String(32)),
        Column("category", String(64)),
        Column("tags", Text),
        Column("video_url", String(1024), nullable=False),
        Column("thumbnail_url", String(1024)),
        Column("description", Text),
        Column("favorite", Boolean, default=False),
        Column("recorded_at", DateTime, index=True),
    )


def map_clip_row(row) -> dict:
    """Map a result row to the wire shape served by ``/api/clips``."""
    mapping = row._mapping
    return {name: mapping.get(name) for name in CLIP_COLUMNS}


class ClipStore:
    """Runs the catalog queries against a SQLAlchemy engine."""

    def __init__(self, engine: Engine, table: str = "lol_clips"):
        self.engine = engine
        self.table = clip_table(table)

    @classmethod
    def from_url(cls, url: str, table: str = "lol_clips") -> "ClipStore":
        engine = create_engine(url, pool_pre_ping=True)
        return cls(engine, table)

    def create_schema(self) -> None:
        """Create the clip table if it does not exist."""
        self.table.metadata.create_all(self.engine)

    def list_clips(self) -> list[dict]:
        """All clips, newest first."""
        query = select(self.table).order_by(self.table.c.recorded_at.desc())
        with self.engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        logger.debug("Fetched %d clip rows", len(rows))
        return [map_clip_row(row) for row in rows]

    def ping(self) -> None:
        """Raise if the database cannot answer a trivial query."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def insert_clips(self, rows: list[dict]) -> None:
        """Insert raw rows; used to seed local databases."""
        with self.engine.begin() as conn:
            conn.execute(self.table.insert(), rows)
