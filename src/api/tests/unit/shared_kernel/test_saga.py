"""Unit tests for the Saga step runner."""

from dataclasses import dataclass, field
from unittest.mock import Mock

import pytest

from shared_kernel.errors import (
    ConflictError,
    ConsistencyGapError,
    DependencyError,
    ErrorKind,
)
from shared_kernel.saga import Saga, SagaProbe, SagaStep


@dataclass
class _State:
    log: list[str] = field(default_factory=list)


def _recording(name: str):
    async def _action(state: _State) -> None:
        state.log.append(name)

    return _action


def _failing(error: Exception):
    async def _action(state: _State) -> None:
        raise error

    return _action


@pytest.fixture
def mock_probe():
    return Mock(spec=SagaProbe)


class TestSagaExecute:
    """Tests for Saga.execute()."""

    @pytest.mark.asyncio
    async def test_runs_steps_in_order(self, mock_probe):
        saga = Saga(
            name="test",
            steps=[
                SagaStep(name="a", action=_recording("a")),
                SagaStep(name="b", action=_recording("b")),
                SagaStep(name="c", action=_recording("c")),
            ],
            probe=mock_probe,
        )

        state = await saga.execute(_State())

        assert state.log == ["a", "b", "c"]
        assert mock_probe.step_completed.call_count == 3

    @pytest.mark.asyncio
    async def test_compensates_completed_steps_in_reverse(self, mock_probe):
        saga = Saga(
            name="test",
            steps=[
                SagaStep(
                    name="a", action=_recording("a"), compensation=_recording("undo-a")
                ),
                SagaStep(
                    name="b", action=_recording("b"), compensation=_recording("undo-b")
                ),
                SagaStep(name="c", action=_failing(ConflictError("taken"))),
            ],
            probe=mock_probe,
        )
        state = _State()

        with pytest.raises(ConflictError):
            await saga.execute(state)

        assert state.log == ["a", "b", "undo-b", "undo-a"]
        mock_probe.step_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_failing_step_is_not_compensated(self, mock_probe):
        saga = Saga(
            name="test",
            steps=[
                SagaStep(
                    name="a",
                    action=_failing(ConflictError()),
                    compensation=_recording("undo-a"),
                ),
            ],
            probe=mock_probe,
        )
        state = _State()

        with pytest.raises(ConflictError):
            await saga.execute(state)

        assert state.log == []

    @pytest.mark.asyncio
    async def test_untyped_error_becomes_dependency_error(self, mock_probe):
        saga = Saga(
            name="test",
            steps=[SagaStep(name="a", action=_failing(RuntimeError("boom")))],
            probe=mock_probe,
        )

        with pytest.raises(DependencyError) as exc_info:
            await saga.execute(_State())

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "boom" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_failed_compensation_raises_consistency_gap(self, mock_probe):
        saga = Saga(
            name="test",
            steps=[
                SagaStep(
                    name="a",
                    action=_recording("a"),
                    compensation=_failing(RuntimeError("delete failed")),
                ),
                SagaStep(name="b", action=_failing(ConflictError())),
            ],
            probe=mock_probe,
        )

        with pytest.raises(ConsistencyGapError) as exc_info:
            await saga.execute(_State())

        assert exc_info.value.kind == ErrorKind.CONSISTENCY_GAP
        mock_probe.compensation_failed.assert_called_once()
        mock_probe.compensation_applied.assert_not_called()

    def test_exposes_step_names(self, mock_probe):
        saga = Saga(
            name="test",
            steps=[
                SagaStep(name="first", action=_recording("a")),
                SagaStep(name="second", action=_recording("b")),
            ],
            probe=mock_probe,
        )

        assert saga.step_names == ("first", "second")
