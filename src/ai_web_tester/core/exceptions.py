"""Exceptions raised by the test-run core."""

from typing import Optional


class TestRunError(Exception):
    """Base class for test-run errors."""

    __test__ = False


class InvalidTransitionError(TestRunError):
    """Raised when a transition is rejected. The state is left unmodified."""

    def __init__(self, message: str, action: Optional[str] = None):
        super().__init__(message)
        self.action = action


class UnknownActionError(InvalidTransitionError):
    """Raised for a transition name the store does not know."""

    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action}", action=action)


class StepFailure(TestRunError):
    """A plan step raised. Recovered by the orchestrator, never raised out of a run."""

    def __init__(self, step: str, cause: BaseException):
        super().__init__(f"Step '{step}' failed: {cause}")
        self.step = step
        self.cause = cause


class ObserverFailure(TestRunError):
    """Raised when a stateChanged subscriber fails.

    The transition itself was applied; only the notification failed. This is
    the one failure that escapes a test run.
    """

    def __init__(self, action: str, cause: BaseException):
        super().__init__(f"Observer failed during {action}: {cause}")
        self.action = action
        self.cause = cause
