"""Saga runner for workflows spanning non-transactional external systems.

A saga is an ordered list of steps, each optionally paired with a
compensating action. The compensation table is declared next to the steps
so it can be reviewed independently of control flow.
"""

from shared_kernel.saga.observability import DefaultSagaProbe, SagaProbe
from shared_kernel.saga.saga import Saga, SagaStep

__all__ = [
    "DefaultSagaProbe",
    "Saga",
    "SagaProbe",
    "SagaStep",
]
