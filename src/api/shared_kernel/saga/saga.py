"""Ordered step runner with best-effort compensation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from shared_kernel.errors import ConsistencyGapError, DependencyError, FleetError
from shared_kernel.saga.observability import DefaultSagaProbe, SagaProbe

S = TypeVar("S")


@dataclass(frozen=True)
class SagaStep(Generic[S]):
    """One step of a saga.

    Attributes:
        name: Step name used in logs (e.g. "provisioning_identity")
        action: Coroutine performing the step; records its outputs on the state
        compensation: Coroutine undoing the step, or None when the step has
            nothing to undo
    """

    name: str
    action: Callable[[S], Awaitable[None]]
    compensation: Callable[[S], Awaitable[None]] | None = None


class Saga(Generic[S]):
    """Runs steps in order; on failure, compensates completed steps in reverse.

    Business rules:
    - A failing step's error is translated to a FleetError (non-typed
      exceptions become DependencyError) and re-raised after compensation
    - Each compensation runs at most once and is never retried
    - A failing compensation raises ConsistencyGapError instead of the
      original step error, since partial state now needs reconciliation
    """

    def __init__(
        self,
        name: str,
        steps: Sequence[SagaStep[S]],
        probe: SagaProbe | None = None,
    ):
        self._name = name
        self._steps = tuple(steps)
        self._probe = probe or DefaultSagaProbe()

    @property
    def step_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self._steps)

    async def execute(self, state: S) -> S:
        """Run every step against the shared state.

        Args:
            state: Mutable state object threaded through the steps

        Returns:
            The same state object, after all steps completed

        Raises:
            FleetError: The translated error of the failing step
            ConsistencyGapError: If a compensating action failed
        """
        completed: list[SagaStep[S]] = []

        for step in self._steps:
            try:
                await step.action(state)
            except FleetError as e:
                self._probe.step_failed(
                    saga=self._name, step=step.name, kind=e.kind.value, error=repr(e)
                )
                await self._compensate(completed, state)
                raise
            except Exception as e:
                error = DependencyError()
                self._probe.step_failed(
                    saga=self._name,
                    step=step.name,
                    kind=error.kind.value,
                    error=repr(e),
                )
                await self._compensate(completed, state)
                raise error from e

            completed.append(step)
            self._probe.step_completed(saga=self._name, step=step.name)

        return state

    async def _compensate(self, completed: list[SagaStep[S]], state: S) -> None:
        for step in reversed(completed):
            if step.compensation is None:
                continue
            try:
                await step.compensation(state)
            except Exception as e:
                self._probe.compensation_failed(
                    saga=self._name, step=step.name, error=repr(e)
                )
                raise ConsistencyGapError() from e
            self._probe.compensation_applied(saga=self._name, step=step.name)
