"""TradeDesk exception hierarchy.

Every error raised by the core derives from TradeDeskError so the web layer
can map them to HTTP responses in one place.
"""

from __future__ import annotations


class TradeDeskError(Exception):
    """Base class for all TradeDesk errors."""

    pass


class UnknownTrade(TradeDeskError, KeyError):
    """Trade identifier is not in the registry."""

    def __init__(self, trade_id: object):
        self.trade_id = trade_id
        super().__init__(f"Unknown trade '{trade_id}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ValidationError(TradeDeskError, ValueError):
    """Submitted form data failed validation; nothing was sent.

    Attributes:
        errors: Mapping of field name to human-readable message
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(f"Validation failed ({summary})")


class CollaboratorError(TradeDeskError):
    """A read request to the persistence backend failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SubmissionFailure(CollaboratorError):
    """The persistence backend rejected a create/update request."""

    def __init__(self, detail: str, status_code: int | None = None):
        self.detail = detail
        super().__init__(f"Submission rejected: {detail}", status_code=status_code)


class SubmissionInProgress(TradeDeskError):
    """A submit was attempted while the same form was still busy."""

    pass


class InvalidTransition(TradeDeskError):
    """View composer transition is not allowed from the current screen."""

    def __init__(self, transition: str, screen: object):
        self.transition = transition
        self.screen = screen
        super().__init__(f"Transition '{transition}' not allowed from screen '{screen}'")


class WizardError(TradeDeskError):
    """Trade-setup wizard guard was violated (e.g. no primary trade chosen)."""

    pass


class AccessDenied(TradeDeskError):
    """The session's user role may not perform this action."""

    pass
