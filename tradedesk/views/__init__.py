"""Screen state machine and trade-setup wizard."""

from tradedesk.views.composer import DashboardTab, Screen, ViewComposer, tabs_for_role
from tradedesk.views.wizard import TradeSetupWizard, WizardResult, WizardStep

__all__ = [
    "DashboardTab",
    "Screen",
    "TradeSetupWizard",
    "ViewComposer",
    "WizardResult",
    "WizardStep",
    "tabs_for_role",
]
