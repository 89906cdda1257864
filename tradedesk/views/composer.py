"""Top-level screen state machine.

Screens and the transitions between them::

    landing --request_login--> login --complete_login--> dashboard
    landing --request_start--> trade-setup   (setup incomplete)
    landing --request_start--> dashboard     (setup complete, signed in)
    landing --request_start--> login         (setup complete, signed out)
    trade-setup --complete_setup--> landing
    dashboard --logout--> landing

Anything else raises InvalidTransition. Inside the dashboard a tab selector
switches the visible panel without leaving the screen.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import structlog

from tradedesk.errors import InvalidTransition
from tradedesk.models import UserRole
from tradedesk.session import SessionContext
from tradedesk.views.wizard import WizardResult

logger = structlog.get_logger(__name__)


class Screen(str, Enum):
    LANDING = "landing"
    LOGIN = "login"
    TRADE_SETUP = "trade-setup"
    DASHBOARD = "dashboard"


class DashboardTab(str, Enum):
    OVERVIEW = "overview"
    SCHEDULE = "schedule"
    JOBS = "jobs"
    CUSTOMERS = "customers"
    ESTIMATES = "estimates"
    INVENTORY = "inventory"
    REPORTS = "reports"
    MOBILE = "mobile"
    SETTINGS = "settings"


ADMIN_TABS = tuple(DashboardTab)
TECHNICIAN_TABS = (DashboardTab.MOBILE, DashboardTab.JOBS, DashboardTab.SCHEDULE)


def tabs_for_role(role: Optional[UserRole]) -> tuple[DashboardTab, ...]:
    """Dashboard tabs offered to a role; first entry is the default tab."""
    if role is None:
        return ()
    if role in (UserRole.ADMIN, UserRole.SOLO):
        return ADMIN_TABS
    return TECHNICIAN_TABS


class ViewComposer:
    """Decides which screen is showing, and which dashboard tab."""

    def __init__(self, session: Optional[SessionContext] = None):
        self.session = session or SessionContext()
        self.screen = Screen.LANDING
        self.setup_complete = self.session.setup_complete
        self.setup_result: Optional[WizardResult] = None
        self.tab: Optional[DashboardTab] = None

    @property
    def available_tabs(self) -> tuple[DashboardTab, ...]:
        if self.screen is not Screen.DASHBOARD:
            return ()
        user = self.session.user
        return tabs_for_role(user.role if user else None)

    def _require(self, transition: str, *screens: Screen) -> None:
        if self.screen not in screens:
            raise InvalidTransition(transition, self.screen.value)

    def _move(self, transition: str, screen: Screen) -> Screen:
        logger.debug("screen_transition", transition=transition, source=self.screen.value, target=screen.value)
        self.screen = screen
        tabs = self.available_tabs
        self.tab = tabs[0] if tabs else None
        return screen

    def request_login(self) -> Screen:
        self._require("request_login", Screen.LANDING)
        return self._move("request_login", Screen.LOGIN)

    def request_start(self) -> Screen:
        """Trade setup first; then the dashboard, or login when nobody is signed in."""
        self._require("request_start", Screen.LANDING)
        if not self.setup_complete:
            target = Screen.TRADE_SETUP
        elif self.session.user is None:
            target = Screen.LOGIN
        else:
            target = Screen.DASHBOARD
        return self._move("request_start", target)

    def complete_login(self, session: Optional[SessionContext] = None) -> Screen:
        """Signed in: setup counts as complete from here on."""
        self._require("complete_login", Screen.LOGIN)
        if session is not None:
            self.session = session
        self.setup_complete = True
        return self._move("complete_login", Screen.DASHBOARD)

    def complete_setup(self, result: WizardResult) -> Screen:
        """Trade setup finished; back to the landing screen to sign in."""
        self._require("complete_setup", Screen.TRADE_SETUP)
        self.setup_result = result
        return self._move("complete_setup", Screen.LANDING)

    def logout(self) -> Screen:
        self._require("logout", Screen.DASHBOARD)
        self.session = SessionContext()
        return self._move("logout", Screen.LANDING)

    def select_tab(self, tab: DashboardTab | str) -> DashboardTab:
        """Switch the visible dashboard panel.

        Raises:
            InvalidTransition: Outside the dashboard, or for a tab the
                user's role is not offered
            ValueError: If ``tab`` is not a dashboard tab
        """
        self._require("select_tab", Screen.DASHBOARD)
        tab = DashboardTab(tab)
        if tab not in self.available_tabs:
            raise InvalidTransition(f"select_tab:{tab.value}", self.screen.value)
        self.tab = tab
        return tab
