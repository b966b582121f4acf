"""
Note library and settings persistence on top of the blob store.

Three fixed keys: the note library (a JSON array, newest first), the app
settings (a JSON object) and the signed-in user (a JSON object). Every write replaces the whole blob. A blob that
cannot be decoded is treated as empty/default and logged, never surfaced.
"""

from __future__ import annotations

import json
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session, sessionmaker

from backend.database import BlobEntry, make_session_factory
from config import NOTES_KEY, SETTINGS_KEY, USER_KEY
from modules.errors import StorageReadError
from modules.models import AppSettings, BackupDocument, NoteResult, SavedNote, User

T = TypeVar("T")


class BlobStore:
    """Key -> text blob, whole-value replace semantics."""

    def __init__(self, session_factory: Optional[sessionmaker] = None) -> None:
        self._session_factory = session_factory or make_session_factory()

    def _session(self) -> Session:
        return self._session_factory()

    def get(self, key: str) -> Optional[str]:
        db = self._session()
        try:
            entry = db.get(BlobEntry, key)
            return entry.value if entry else None
        finally:
            db.close()

    def put(self, key: str, value: str) -> None:
        db = self._session()
        try:
            entry = db.get(BlobEntry, key)
            if entry is None:
                db.add(BlobEntry(key=key, value=value))
            else:
                entry.value = value
            db.commit()
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self._session()
        try:
            entry = db.get(BlobEntry, key)
            if entry is not None:
                db.delete(entry)
                db.commit()
        finally:
            db.close()


class NoteLibrary:
    """Saved notes and app settings for one user."""

    def __init__(self, store: BlobStore) -> None:
        self.store = store

    # ── decoding ─────────────────────────────────────────────────────────

    def _read(self, key: str, decode: Callable[[str], T], default: Callable[[], T]) -> T:
        raw = self.store.get(key)
        if raw is None:
            return default()
        try:
            return self._decode(key, raw, decode)
        except StorageReadError:
            logger.warning(f"Stored blob {key!r} is unreadable; using default")
            return default()

    @staticmethod
    def _decode(key: str, raw: str, decode: Callable[[str], T]) -> T:
        try:
            return decode(raw)
        except (ValueError, TypeError, ValidationError) as exc:
            raise StorageReadError(f"Stored data under {key!r} is unreadable.") from exc

    # ── notes ────────────────────────────────────────────────────────────

    def get_notes(self) -> list[SavedNote]:
        return self._read(NOTES_KEY, _decode_notes, list)

    def _write_notes(self, notes: list[SavedNote]) -> None:
        payload = [n.model_dump(by_alias=True) for n in notes]
        self.store.put(NOTES_KEY, json.dumps(payload))

    def save_note(self, note: NoteResult, reading_time_minutes: int = 0) -> SavedNote:
        saved = SavedNote(
            title=note.title,
            sections=list(note.sections),
            keywords_found=list(note.keywords_found),
            id=str(uuid.uuid4()),
            created_at=int(time.time() * 1000),
            reading_time_minutes=reading_time_minutes,
        )
        self._write_notes([saved] + self.get_notes())
        logger.info(f"Saved note {saved.id} ({note.title!r})")
        return saved

    def get_note(self, note_id: str) -> Optional[SavedNote]:
        return next((n for n in self.get_notes() if n.id == note_id), None)

    def delete_note(self, note_id: str) -> bool:
        notes = self.get_notes()
        remaining = [n for n in notes if n.id != note_id]
        if len(remaining) == len(notes):
            return False
        self._write_notes(remaining)
        logger.info(f"Deleted note {note_id}")
        return True

    def clear_all_notes(self) -> None:
        self.store.delete(NOTES_KEY)
        logger.info("Cleared the note library")

    def search_notes(self, term: str) -> list[SavedNote]:
        """Case-insensitive substring match on title or any keyword."""
        needle = (term or "").lower()
        if not needle:
            return self.get_notes()
        return [
            n for n in self.get_notes()
            if needle in n.title.lower()
            or any(needle in k.lower() for k in n.keywords_found)
        ]

    # ── settings ─────────────────────────────────────────────────────────

    def get_settings(self) -> AppSettings:
        return self._read(SETTINGS_KEY, AppSettings.model_validate_json, AppSettings)

    def save_settings(self, settings: AppSettings) -> None:
        self.store.put(SETTINGS_KEY, settings.model_dump_json(by_alias=True))

    # ── signed-in user ───────────────────────────────────────────────────

    def get_user(self) -> Optional[User]:
        return self._read(USER_KEY, User.model_validate_json, lambda: None)

    def save_user(self, user: User) -> None:
        self.store.put(USER_KEY, user.model_dump_json())

    def clear_user(self) -> None:
        self.store.delete(USER_KEY)

    # ── backup ───────────────────────────────────────────────────────────

    def export_data(self) -> str:
        """Pretty-printed JSON backup of every note plus the settings."""
        backup = BackupDocument(
            notes=self.get_notes(),
            settings=self.get_settings(),
            exported_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )
        return json.dumps(backup.model_dump(by_alias=True), indent=2)

    def import_note(self, note: NoteResult, reading_time_minutes: int = 0) -> SavedNote:
        """Add a re-imported JSON export to the library as a new note."""
        return self.save_note(note, reading_time_minutes)


def _decode_notes(raw: str) -> list[SavedNote]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TypeError("note library must be a JSON array")
    return [SavedNote.model_validate(item) for item in data]
