"""Tests for role-scoped auth sessions."""

from jewelstore.core.sessions import STORAGE_KEYS, PersistedState, Role, SessionContext


class TestPersistedState:
    def test_round_trip_and_clear(self):
        session = {}
        state = PersistedState(session, "key")

        state.save({"token": "t"})
        assert state.load() == {"token": "t"}

        state.clear()
        assert "key" not in session

    def test_clear_missing_key(self):
        PersistedState({}, "key").clear()


class TestSessionContext:
    """Tests for SessionContext across roles."""

    def test_roles_use_separate_keys(self):
        session = {}
        admin = SessionContext(Role.ADMIN, session)
        customer = SessionContext(Role.CUSTOMER, session)

        admin.set("admin-token", name="Admin")

        assert admin.is_authenticated
        assert not customer.is_authenticated
        assert session[STORAGE_KEYS[Role.ADMIN]]["token"] == "admin-token"
        assert STORAGE_KEYS[Role.CUSTOMER] not in session

    def test_restores_saved_state(self):
        session = {"va_user_token": {"token": "abc", "name": "Asha", "email": "asha@example.com"}}

        context = SessionContext(Role.CUSTOMER, session)

        assert context.token == "abc"
        assert context.name == "Asha"
        assert context.email == "asha@example.com"

    def test_restores_bare_token(self):
        context = SessionContext(Role.CUSTOMER, {"va_user_token": "abc"})

        assert context.token == "abc"
        assert context.name is None

    def test_unreadable_state_is_signed_out(self):
        context = SessionContext(Role.ADMIN, {"va_admin_auth": ["junk"]})

        assert not context.is_authenticated

    def test_empty_token_logs_out(self):
        session = {}
        context = SessionContext(Role.CUSTOMER, session)
        context.set("abc")

        context.set("")

        assert not context
        assert session == {}

    def test_logout_clears_only_own_role(self):
        session = {}
        admin = SessionContext(Role.ADMIN, session)
        customer = SessionContext(Role.CUSTOMER, session)
        admin.set("a")
        customer.set("c")

        customer.logout()

        assert SessionContext(Role.ADMIN, session).token == "a"
        assert SessionContext(Role.CUSTOMER, session).token is None
