"""Data models for test runs and test plans."""

from .run_models import (
    RunStatus,
    StepStatus,
    TransitionAction,
    RunMetadata,
    StepRecord,
    ScreenshotRecord,
    ErrorRecord,
    AnalysisRecord,
    RunArtifacts,
    RunState,
    StateChange,
    TransitionFailure,
    RunResult,
)
from .llm_models import ModelConfig
from .plan_models import StepAction, TestStep, TestPlan

__all__ = [
    "RunStatus",
    "StepStatus",
    "TransitionAction",
    "RunMetadata",
    "StepRecord",
    "ScreenshotRecord",
    "ErrorRecord",
    "AnalysisRecord",
    "RunArtifacts",
    "RunState",
    "StateChange",
    "TransitionFailure",
    "RunResult",
    "ModelConfig",
    "StepAction",
    "TestStep",
    "TestPlan",
]
