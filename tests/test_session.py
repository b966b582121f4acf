"""
Session State Tests
"""
from modules.models import AppSettings
from modules.session import AppSession


class TestLogin:

    def test_login_defaults_name(self):
        session = AppSession()
        user = session.login(" ada@example.com ", "pw")
        assert user.name == "ada"
        assert session.signed_in

    def test_login_with_name(self):
        session = AppSession()
        assert session.login("ada@example.com", "pw", "Ada Lovelace").name == "Ada Lovelace"

    def test_login_requires_credentials(self):
        session = AppSession()
        assert session.login("", "pw") is None
        assert session.login("ada@example.com", "") is None
        assert not session.signed_in

    def test_logout_clears_state(self, note):
        session = AppSession()
        session.login("ada@example.com", "pw")
        token = session.begin_generation()
        session.complete_generation(token, note)
        session.logout()
        assert not session.signed_in
        assert session.result is None


class TestLoad:

    def test_load_reads_settings(self, library):
        library.save_settings(AppSettings(auto_save=True))
        session = AppSession()
        session.load(library)
        assert session.settings.auto_save is True

    def test_login_survives_reload(self, library):
        """A fresh session over the same library starts signed in."""
        session = AppSession()
        session.load(library)
        session.login("ada@example.com", "pw", "Ada")

        reloaded = AppSession()
        reloaded.load(library)
        assert reloaded.signed_in
        assert reloaded.user.name == "Ada"

    def test_logout_forgets_user(self, library):
        session = AppSession()
        session.load(library)
        session.login("ada@example.com", "pw")
        session.logout()

        reloaded = AppSession()
        reloaded.load(library)
        assert not reloaded.signed_in


class TestLastWriteWins:
    """Only the latest generation's result is displayed"""

    def test_latest_generation_shown(self, note):
        session = AppSession()
        token = session.begin_generation()
        assert session.complete_generation(token, note)
        assert session.result == note
        assert session.is_saved is False

    def test_stale_result_discarded(self, note):
        session = AppSession()
        first = session.begin_generation()
        second = session.begin_generation()
        assert not session.complete_generation(first, note)
        assert session.result is None
        assert session.complete_generation(second, note)

    def test_new_upload_discards_in_flight(self, note):
        session = AppSession()
        token = session.begin_generation()
        session.clear_result()
        assert not session.complete_generation(token, note)

    def test_show_saved(self, library, note):
        saved = library.save_note(note, 1)
        session = AppSession()
        token = session.begin_generation()
        session.show_saved(saved)
        assert session.result == saved
        assert session.is_saved
        assert not session.complete_generation(token, note)
