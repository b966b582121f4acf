"""
Per-browser-session state.

Holds the signed-in user, the note currently on display and the generation
token used to discard stale results. One instance lives in each Streamlit
session; nothing here is module-global.
"""

from __future__ import annotations

from typing import Optional

from modules.models import AppSettings, NoteResult, SavedNote, User


class AppSession:
    """Explicit session context: created on load, cleared on logout."""

    def __init__(self) -> None:
        self.user: Optional[User] = None
        self.settings = AppSettings()
        self.result: Optional[NoteResult] = None
        self.is_saved = False
        self._generation = 0
        self._library = None

    # ── lifecycle ────────────────────────────────────────────────────────

    def load(self, library) -> None:
        """
        Initialise from persisted settings and restore the signed-in user
        (``library`` is a NoteLibrary). Later logins and logouts are written
        back to it.
        """
        self._library = library
        self.settings = library.get_settings()
        self.user = library.get_user()

    def login(self, email: str, password: str, name: str | None = None) -> Optional[User]:
        """
        Sign in. Any non-empty email and password are accepted; the display
        name defaults to the part of the email before ``@``.
        """
        email = (email or "").strip()
        if not email or not password:
            return None
        self.user = User(email=email, name=(name or "").strip() or email.split("@")[0])
        if self._library is not None:
            self._library.save_user(self.user)
        return self.user

    def logout(self) -> None:
        self.user = None
        if self._library is not None:
            self._library.clear_user()
        self.result = None
        self.is_saved = False
        self._generation += 1

    @property
    def signed_in(self) -> bool:
        return self.user is not None

    # ── displayed result ─────────────────────────────────────────────────

    def begin_generation(self) -> int:
        """Start a new generation; any earlier in-flight result becomes stale."""
        self._generation += 1
        self.result = None
        self.is_saved = False
        return self._generation

    def complete_generation(self, token: int, result: NoteResult) -> bool:
        """Show *result* if *token* is still the latest generation."""
        if token != self._generation:
            return False
        self.result = result
        self.is_saved = False
        return True

    def show_saved(self, note: SavedNote) -> None:
        self._generation += 1
        self.result = note
        self.is_saved = True

    def clear_result(self) -> None:
        self._generation += 1
        self.result = None
        self.is_saved = False
