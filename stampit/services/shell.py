"""Screen state machine for the front end.

The shell never decides a role on its own: the role always comes from the
selected landing option or from the session handed over by the auth layer,
and identity and role travel together in one AuthState.
"""
from dataclasses import dataclass
from enum import Enum


class Screen(str, Enum):
    LANDING = "landing"
    BUSINESS_AUTH = "business_auth"
    CUSTOMER_AUTH = "customer_auth"
    BUSINESS_DASHBOARD = "business_dashboard"
    CUSTOMER_DASHBOARD = "customer_dashboard"


class Role(str, Enum):
    BUSINESS = "business"
    CUSTOMER = "customer"


AUTH_SCREENS = {Role.BUSINESS: Screen.BUSINESS_AUTH, Role.CUSTOMER: Screen.CUSTOMER_AUTH}
DASHBOARDS = {Role.BUSINESS: Screen.BUSINESS_DASHBOARD, Role.CUSTOMER: Screen.CUSTOMER_DASHBOARD}


class InvalidTransition(Exception):
    pass


@dataclass(frozen=True)
class AuthState:
    role: Role
    session_id: str
    subject: str | None = None  # account id or phone


def auth_state_from_session(session) -> AuthState | None:
    if session is None:
        return None

    role = Role(session.role)
    subject = session.phone if role == Role.CUSTOMER else session.account_id
    return AuthState(
        role=role,
        session_id=str(session.id),
        subject=str(subject) if subject is not None else None,
    )


def initial_screen(session) -> Screen:
    auth = auth_state_from_session(session)
    return DASHBOARDS[auth.role] if auth else Screen.LANDING


class Shell:
    def __init__(self, session=None):
        self.role: Role | None = None
        self.auth: AuthState | None = None
        self.screen = Screen.LANDING

        auth = auth_state_from_session(session)
        if auth:
            self.role = auth.role
            self.auth = auth
            self.screen = DASHBOARDS[auth.role]

    def _expect(self, *screens: Screen):
        if self.screen not in screens:
            raise InvalidTransition(f"not allowed from {self.screen.value}")

    def select_role(self, role) -> Screen:
        self._expect(Screen.LANDING)
        self.role = Role(role)
        self.screen = AUTH_SCREENS[self.role]
        return self.screen

    def auth_success(self, session) -> Screen:
        self._expect(Screen.BUSINESS_AUTH, Screen.CUSTOMER_AUTH)
        auth = auth_state_from_session(session)
        if auth is None:
            raise InvalidTransition("auth_success needs a session")
        if auth.role != self.role:
            raise InvalidTransition(f"session role {auth.role.value} does not match {self.role.value}")

        self.auth = auth
        self.screen = DASHBOARDS[auth.role]
        return self.screen

    def back(self) -> Screen:
        self._expect(Screen.BUSINESS_AUTH, Screen.CUSTOMER_AUTH)
        self.role = None
        self.screen = Screen.LANDING
        return self.screen

    def sign_out(self) -> Screen:
        self._expect(Screen.BUSINESS_DASHBOARD, Screen.CUSTOMER_DASHBOARD)
        self.role = None
        self.auth = None
        self.screen = Screen.LANDING
        return self.screen
