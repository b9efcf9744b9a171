"""Run state data models for the test-run state machine.

This module defines the Pydantic models that make up a single test run:
run metadata, step history, and the append-only artifact collections
(screenshots, errors, AI analysis).
"""

from dataclasses import dataclass
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum
from datetime import datetime


class RunStatus(str, Enum):
    """Overall run status."""

    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether the run can no longer change status."""
        return self in (RunStatus.SUCCESS, RunStatus.FAILED)


class StepStatus(str, Enum):
    """Lifecycle status of a single step."""

    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class TransitionAction(str, Enum):
    """Named transitions accepted by the state store."""

    START_TEST = "START_TEST"
    END_TEST = "END_TEST"
    UPDATE_STEP = "UPDATE_STEP"
    CAPTURE_SCREENSHOT = "CAPTURE_SCREENSHOT"
    RECORD_ERROR = "RECORD_ERROR"
    ADD_ANALYSIS = "ADD_ANALYSIS"


class RunMetadata(BaseModel):
    """Run timing and status. A status of None means the run has not started."""

    start_time: Optional[datetime] = Field(default=None, description="Run start")
    end_time: Optional[datetime] = Field(default=None, description="Run end")
    status: Optional[RunStatus] = Field(default=None, description="Run status")


class StepRecord(BaseModel):
    """One status transition of a named step."""

    step: str = Field(description="Step name")
    status: StepStatus = Field(description="Step status at this point")
    timestamp: datetime = Field(default_factory=datetime.now)


class ScreenshotRecord(BaseModel):
    """Screenshot captured during the run."""

    path: str = Field(description="Path returned by the page capability")
    step: Optional[str] = Field(default=None, description="Step the screenshot belongs to")
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorRecord(BaseModel):
    """Error recorded for a failed step."""

    error: str = Field(description="Error message")
    step: Optional[str] = Field(default=None, description="Failing step")
    timestamp: datetime = Field(default_factory=datetime.now)


class AnalysisRecord(BaseModel):
    """AI-generated analysis of a recorded error."""

    content: str = Field(description="Analysis text")
    step: Optional[str] = Field(default=None, description="Step the analysis refers to")
    timestamp: datetime = Field(default_factory=datetime.now)


class RunArtifacts(BaseModel):
    """Append-only artifact collections."""

    screenshots: List[ScreenshotRecord] = Field(default_factory=list)
    errors: List[ErrorRecord] = Field(default_factory=list)
    analysis: List[AnalysisRecord] = Field(default_factory=list)


class RunState(BaseModel):
    """Complete state of one test run."""

    metadata: RunMetadata = Field(default_factory=RunMetadata)
    history: List[StepRecord] = Field(default_factory=list)
    artifacts: RunArtifacts = Field(default_factory=RunArtifacts)

    @property
    def failed_steps(self) -> List[str]:
        """Names of steps that reached the failed status, in order."""
        return [
            record.step for record in self.history if record.status == StepStatus.FAILED
        ]

    @property
    def step_names(self) -> List[str]:
        """Distinct step names in the order they were first started."""
        names: List[str] = []
        for record in self.history:
            if record.step not in names:
                names.append(record.step)
        return names

    @property
    def duration_seconds(self) -> Optional[float]:
        """Run duration, if the run has both started and ended."""
        if self.metadata.start_time is None or self.metadata.end_time is None:
            return None
        return (self.metadata.end_time - self.metadata.start_time).total_seconds()


@dataclass(frozen=True)
class StateChange:
    """Payload of the stateChanged event.

    ``previous`` is a deep snapshot taken before the transition; ``current`` is
    the live state object owned by the store.
    """

    previous: RunState
    current: RunState
    action: TransitionAction


class RunResult(BaseModel):
    """Outcome of one executed test plan, as retained by the service."""

    run_id: str = Field(description="Run identifier")
    plan_name: str = Field(description="Executed plan")
    target_url: Optional[str] = Field(default=None, description="Page under test")
    state: RunState = Field(description="Exported run state")
    summary: Optional[str] = Field(default=None, description="AI summary of the run")
    report_path: Optional[str] = Field(default=None, description="Written HTML report")
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def status(self) -> Optional[RunStatus]:
        """Terminal status of the run."""
        return self.state.metadata.status


@dataclass(frozen=True)
class TransitionFailure:
    """Payload of the error event.

    ``state`` is a snapshot of the state as it was before the rejected
    transition.
    """

    error: Exception
    action: str
    state: RunState
