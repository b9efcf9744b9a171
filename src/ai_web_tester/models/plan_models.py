"""Test plan declarations.

A plan is an ordered list of named steps. Each step is an async callable that
receives the page capability and either returns normally or raises.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional


StepAction = Callable[[Any], Awaitable[None]]


@dataclass
class TestStep:
    """One named unit of test action."""

    __test__ = False

    name: str
    action: StepAction
    description: Optional[str] = None


@dataclass
class TestPlan:
    """Ordered sequence of steps run against a single page."""

    __test__ = False

    name: str
    steps: List[TestStep] = field(default_factory=list)
    target_url: Optional[str] = None

    def add_step(
        self, name: str, action: StepAction, description: Optional[str] = None
    ) -> "TestPlan":
        """Append a step and return the plan for chaining."""
        self.steps.append(TestStep(name=name, action=action, description=description))
        return self

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]
