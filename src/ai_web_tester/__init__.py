"""AI Web Tester: automated browser tests with AI failure analysis.

The core is a state machine for a single test run:
- StateStore applies named transitions and publishes stateChanged/error events
- ObserverBus delivers events to subscribers in registration order
- TestOrchestrator drives a test plan and turns recorded errors into analysis
"""

from .core import (
    Event,
    ObserverBus,
    StateStore,
    TestOrchestrator,
    InvalidTransitionError,
    UnknownActionError,
    ObserverFailure,
)
from .models import RunState, RunStatus, StepStatus, TransitionAction, TestPlan, TestStep

__version__ = "0.1.0"

__all__ = [
    "Event",
    "ObserverBus",
    "StateStore",
    "TestOrchestrator",
    "InvalidTransitionError",
    "UnknownActionError",
    "ObserverFailure",
    "RunState",
    "RunStatus",
    "StepStatus",
    "TransitionAction",
    "TestPlan",
    "TestStep",
]
