"""State store for a single test run.

The store owns the RunState for its whole lifetime. State changes only
through named transitions; each transition is validated before anything is
mutated, and observers are notified (and awaited) before the transition
returns. Observers may issue further transitions: those nest depth-first on
the same call stack, so all transitions are applied strictly one at a time.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from .exceptions import InvalidTransitionError, ObserverFailure, UnknownActionError
from .observers import Event, ObserverBus
from ..models.run_models import (
    AnalysisRecord,
    ErrorRecord,
    RunState,
    RunStatus,
    ScreenshotRecord,
    StateChange,
    StepRecord,
    TransitionAction,
    TransitionFailure,
)

logger = logging.getLogger(__name__)


class StateStore:
    """
    Apply named transitions to a RunState and publish the results.

    PATTERN: Validate, snapshot, mutate, notify
    CRITICAL: Never hand out references to the live state except through
        StateChange.current
    GOTCHA: Observer reactions run inside transition(); a slow observer
        delays the caller
    """

    def __init__(
        self,
        bus: Optional[ObserverBus] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the store with an empty run state.

        Args:
            bus: Observer bus to publish on (a new one is created if omitted)
            clock: Timestamp source
        """
        self.bus = bus or ObserverBus()
        self._clock = clock
        self._state = RunState()
        self._depth = 0
        self.transition_count = 0

    @property
    def state(self) -> RunState:
        """Deep copy of the current state."""
        return self.export_state()

    @property
    def depth(self) -> int:
        """Number of transitions currently in flight on the call stack."""
        return self._depth

    def subscribe(self, event: Event, callback: Callable[[Any], Any]) -> None:
        """Shortcut for ``self.bus.subscribe``."""
        self.bus.subscribe(event, callback)

    async def transition(
        self, action: Any, payload: Optional[Dict[str, Any]] = None
    ) -> RunState:
        """
        Apply one transition and notify observers.

        Args:
            action: TransitionAction or its name
            payload: Action-specific fields

        Returns:
            Deep copy of the state after the transition and all nested reactions

        Raises:
            UnknownActionError: If the action name is not recognized
            InvalidTransitionError: If the transition is not allowed now or the
                payload is invalid
            ObserverFailure: If a stateChanged subscriber raised
        """
        payload = payload or {}
        action_name = getattr(action, "value", action)
        previous = self._state.model_copy(deep=True)

        try:
            resolved = self._resolve_action(action)
            prepared = self._validate(resolved, payload)
        except InvalidTransitionError as e:
            logger.error(f"Rejected transition {action_name}: {e}")
            await self.bus.publish(
                Event.ERROR,
                TransitionFailure(error=e, action=str(action_name), state=previous),
            )
            raise

        self._depth += 1
        try:
            self._apply(resolved, prepared)
            self.transition_count += 1
            logger.debug(f"Applied {resolved.value} (depth={self._depth})")

            try:
                await self.bus.publish(
                    Event.STATE_CHANGED,
                    StateChange(previous=previous, current=self._state, action=resolved),
                )
            except ObserverFailure:
                # Already reported by the nested transition that raised it
                raise
            except Exception as e:
                failure = ObserverFailure(resolved.value, e)
                logger.error(str(failure))
                await self.bus.publish(
                    Event.ERROR,
                    TransitionFailure(
                        error=failure,
                        action=resolved.value,
                        state=self._state.model_copy(deep=True),
                    ),
                )
                raise failure from e
        finally:
            self._depth -= 1

        return self._state.model_copy(deep=True)

    def export_state(self) -> RunState:
        """Return a deep, independent copy of the full run state."""
        return self._state.model_copy(deep=True)

    def export_dict(self) -> Dict[str, Any]:
        """Return the run state as JSON-compatible data."""
        return self._state.model_dump(mode="json")

    def _resolve_action(self, action: Any) -> TransitionAction:
        if isinstance(action, TransitionAction):
            return action
        try:
            return TransitionAction(action)
        except ValueError:
            raise UnknownActionError(str(action))

    def _validate(
        self, action: TransitionAction, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Check preconditions and build the values to apply.

        Nothing is mutated here, so a rejected transition leaves no trace.
        """
        status = self._state.metadata.status

        if action == TransitionAction.START_TEST:
            if status is not None:
                raise InvalidTransitionError(
                    f"Run already started (status={status.value})", action=action.value
                )
            return {"now": self._clock()}

        if status is not None and status.is_terminal:
            raise InvalidTransitionError(
                f"Run already finished (status={status.value})", action=action.value
            )

        try:
            if action == TransitionAction.END_TEST:
                if status != RunStatus.RUNNING:
                    raise InvalidTransitionError(
                        "Run has not been started", action=action.value
                    )
                final = RunStatus(payload.get("status"))
                if not final.is_terminal:
                    raise InvalidTransitionError(
                        f"END_TEST requires a terminal status, got {final.value}",
                        action=action.value,
                    )
                return {"now": self._clock(), "status": final}

            now = self._clock()
            if action == TransitionAction.UPDATE_STEP:
                record = StepRecord(
                    step=payload.get("step"), status=payload.get("status"), timestamp=now
                )
            elif action == TransitionAction.CAPTURE_SCREENSHOT:
                record = ScreenshotRecord(
                    path=payload.get("path"), step=payload.get("step"), timestamp=now
                )
            elif action == TransitionAction.RECORD_ERROR:
                error = payload.get("error")
                record = ErrorRecord(
                    error=None if error is None else str(error),
                    step=payload.get("step"),
                    timestamp=now,
                )
            else:
                record = AnalysisRecord(
                    content=payload.get("content"), step=payload.get("step"), timestamp=now
                )
            return {"record": record}
        except ValidationError as e:
            raise InvalidTransitionError(
                f"Invalid payload for {action.value}: {e.error_count()} error(s)",
                action=action.value,
            )
        except ValueError as e:
            raise InvalidTransitionError(
                f"Invalid payload for {action.value}: {e}", action=action.value
            )

    def _apply(self, action: TransitionAction, prepared: Dict[str, Any]) -> None:
        metadata = self._state.metadata
        artifacts = self._state.artifacts

        if action == TransitionAction.START_TEST:
            metadata.start_time = prepared["now"]
            metadata.status = RunStatus.RUNNING
        elif action == TransitionAction.END_TEST:
            metadata.end_time = prepared["now"]
            metadata.status = prepared["status"]
        elif action == TransitionAction.UPDATE_STEP:
            self._state.history.append(prepared["record"])
        elif action == TransitionAction.CAPTURE_SCREENSHOT:
            artifacts.screenshots.append(prepared["record"])
        elif action == TransitionAction.RECORD_ERROR:
            artifacts.errors.append(prepared["record"])
        elif action == TransitionAction.ADD_ANALYSIS:
            artifacts.analysis.append(prepared["record"])
