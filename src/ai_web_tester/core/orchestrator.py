"""Test orchestrator: drives a test plan through the state store.

The orchestrator translates each step's outcome into transitions and reacts
to recorded errors by asking the error analyzer for an explanation, which is
fed back into the store as an ADD_ANALYSIS transition.
"""

import logging
from typing import Optional

from .exceptions import StepFailure
from .observers import Event
from .state_store import StateStore
from ..browser.base import BasePage
from ..llm.analyzer import ErrorAnalyzer
from ..models.plan_models import TestPlan, TestStep
from ..models.run_models import (
    RunState,
    RunStatus,
    StateChange,
    StepStatus,
    TransitionAction,
    TransitionFailure,
)

logger = logging.getLogger(__name__)

ANALYSIS_UNAVAILABLE = "Error analysis unavailable"


class TestOrchestrator:
    """
    Run one test plan and collect its history, artifacts and analysis.

    PATTERN: Observer reaction feeding back into the store
    CRITICAL: One failing step aborts the rest of the plan
    CRITICAL: Analyzer failures degrade to a placeholder analysis, never abort
    GOTCHA: A RECORD_ERROR transition only returns after the analysis has been
        added, because the reaction is awaited inside the transition

    Example:
        orchestrator = TestOrchestrator(analyzer=LLMErrorAnalyzer(provider))
        state = await orchestrator.run_test(page, plan)
    """

    __test__ = False

    def __init__(self, analyzer: ErrorAnalyzer, store: Optional[StateStore] = None):
        """
        Initialize the orchestrator and register its observers.

        Args:
            analyzer: Error analyzer invoked for every recorded error
            store: State store to drive (a fresh one is created if omitted)
        """
        self.analyzer = analyzer
        self.store = store or StateStore()

        self.store.subscribe(Event.STATE_CHANGED, self._handle_state_change)
        self.store.subscribe(Event.ERROR, self._handle_error)

    async def run_test(self, page: BasePage, plan: TestPlan) -> RunState:
        """
        Execute a test plan against a page.

        Args:
            page: Page capability the steps act on
            plan: Ordered steps to run

        Returns:
            Exported run state with a terminal status

        Raises:
            ObserverFailure: If an observer fails while a transition is notified
        """
        logger.info(f"Starting test plan '{plan.name}' ({len(plan.steps)} steps)")
        await self.store.transition(TransitionAction.START_TEST)

        failure: Optional[StepFailure] = None
        for step in plan.steps:
            failure = await self._run_step(page, step)
            if failure is not None:
                logger.warning(f"Aborting plan '{plan.name}': {failure}")
                break

        status = RunStatus.FAILED if failure is not None else RunStatus.SUCCESS
        await self.store.transition(TransitionAction.END_TEST, {"status": status})

        logger.info(f"Test plan '{plan.name}' finished with status {status.value}")
        return self.store.export_state()

    def export_state(self) -> RunState:
        """Deep copy of the current run state."""
        return self.store.export_state()

    async def _run_step(self, page: BasePage, step: TestStep) -> Optional[StepFailure]:
        """Run one step; return the failure if the step failed."""
        await self.store.transition(
            TransitionAction.UPDATE_STEP,
            {"step": step.name, "status": StepStatus.RUNNING},
        )

        try:
            await step.action(page)
            path = await page.screenshot(label=step.name)
        except Exception as e:
            failure = StepFailure(step.name, e)
            await self._record_failure(page, step, e)
            return failure

        await self.store.transition(
            TransitionAction.CAPTURE_SCREENSHOT, {"path": path, "step": step.name}
        )
        await self.store.transition(
            TransitionAction.UPDATE_STEP,
            {"step": step.name, "status": StepStatus.SUCCESS},
        )
        logger.debug(f"Step '{step.name}' succeeded")
        return None

    async def _record_failure(
        self, page: BasePage, step: TestStep, error: Exception
    ) -> None:
        try:
            path: Optional[str] = await page.screenshot(label=f"{step.name}-error")
        except Exception as e:
            logger.warning(f"Error screenshot for step '{step.name}' failed: {e}")
            path = None

        if path is not None:
            await self.store.transition(
                TransitionAction.CAPTURE_SCREENSHOT, {"path": path, "step": step.name}
            )

        await self.store.transition(
            TransitionAction.RECORD_ERROR,
            {"error": str(error) or type(error).__name__, "step": step.name},
        )
        await self.store.transition(
            TransitionAction.UPDATE_STEP,
            {"step": step.name, "status": StepStatus.FAILED},
        )

    async def _handle_state_change(self, change: StateChange) -> None:
        """Analyze each newly recorded error."""
        if change.action != TransitionAction.RECORD_ERROR:
            return

        error = change.current.artifacts.errors[-1].model_copy()
        try:
            content = await self.analyzer.analyze(error)
        except Exception as e:
            logger.warning(f"Analysis of error in step '{error.step}' failed: {e}")
            content = f"{ANALYSIS_UNAVAILABLE}: {e}"
        if not isinstance(content, str):
            logger.warning(
                f"Analyzer returned {type(content).__name__} for step '{error.step}'"
            )
            content = ANALYSIS_UNAVAILABLE
        elif not content:
            content = ANALYSIS_UNAVAILABLE

        await self.store.transition(
            TransitionAction.ADD_ANALYSIS, {"content": content, "step": error.step}
        )

    async def _handle_error(self, failure: TransitionFailure) -> None:
        """Report failed transitions. Never issues transitions itself."""
        logger.error(f"Error during action {failure.action}: {failure.error}")
