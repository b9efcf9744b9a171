"""Test-run core: state store, observer bus and orchestrator."""

from .exceptions import (
    TestRunError,
    InvalidTransitionError,
    UnknownActionError,
    StepFailure,
    ObserverFailure,
)
from .observers import Event, ObserverBus
from .state_store import StateStore
from .orchestrator import TestOrchestrator, ANALYSIS_UNAVAILABLE

__all__ = [
    "TestRunError",
    "InvalidTransitionError",
    "UnknownActionError",
    "StepFailure",
    "ObserverFailure",
    "Event",
    "ObserverBus",
    "StateStore",
    "TestOrchestrator",
    "ANALYSIS_UNAVAILABLE",
]
