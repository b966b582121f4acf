"""
Database models and engine setup.

Uses SQLAlchemy ORM with SQLite. Persistence is a plain key-value blob
store: each key holds one JSON document that is replaced as a whole.
The default database file is ``data/pdf_notes.db`` (auto-created).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL, PROJECT_ROOT

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ═════════════════════════════════════════════════════════════════════════════
# Models
# ═════════════════════════════════════════════════════════════════════════════

class BlobEntry(Base):
    """One JSON blob under a fixed key."""

    __tablename__ = "blobs"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<BlobEntry key={self.key!r} size={len(self.value or '')}>"


# ── Engine / session factory ─────────────────────────────────────────────────
def make_session_factory(url: str = DATABASE_URL) -> sessionmaker:
    """Create an engine for *url*, create tables, and return a session factory."""
    if url.startswith("sqlite"):
        if url.startswith("sqlite:///") and ":memory:" not in url:
            (PROJECT_ROOT / "data").mkdir(exist_ok=True)
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
    else:
        engine = create_engine(url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
