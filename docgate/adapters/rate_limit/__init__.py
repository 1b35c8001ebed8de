"""Window policies deciding when the admission loop may release a request."""

from docgate.adapters.rate_limit.base import AbstractWindowPolicy, AdmissionDecision
from docgate.adapters.rate_limit.in_memory import (
    FixedWindowPolicy,
    SlidingWindowPolicy,
    create_window_policy,
)

__all__ = [
    "AbstractWindowPolicy",
    "AdmissionDecision",
    "FixedWindowPolicy",
    "SlidingWindowPolicy",
    "create_window_policy",
]
