"""Aggregation and classification of probe outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kong_route_tester.execution.runner import ProbeOutcome

_SUCCESS_MIN = 200
_SUCCESS_MAX = 400
_UNAUTHORIZED = 401


class OutcomeClass(Enum):
    """How an outcome counts in the run summary."""

    SUCCESS = "success"
    AUTH_FAILED = "auth_failed"
    OTHER_ERROR = "other_error"
    UNCLASSIFIED = "unclassified"


def classify(outcome: ProbeOutcome) -> OutcomeClass:
    """Classify an outcome; the first matching rule wins.

    2xx/3xx is a success, 401 an auth failure, any other status >= 400 or a
    transport error is an other error. Anything else (such as a dry-run
    outcome with status 0 and no error) is unclassified.
    """
    status = outcome.status_code
    if _SUCCESS_MIN <= status < _SUCCESS_MAX:
        return OutcomeClass.SUCCESS
    if status == _UNAUTHORIZED:
        return OutcomeClass.AUTH_FAILED
    if status >= _SUCCESS_MAX or outcome.error is not None:
        return OutcomeClass.OTHER_ERROR
    return OutcomeClass.UNCLASSIFIED


def is_problematic(outcome: ProbeOutcome) -> bool:
    """A route believed public that answered 401."""
    return outcome.status_code == _UNAUTHORIZED and not outcome.requires_auth


@dataclass
class RunSummary:
    """Counts and breakdowns over every outcome of a run.

    Attributes:
        total: Number of outcomes.
        successful: 2xx/3xx outcomes.
        auth_failed: 401 outcomes.
        other_errors: Other error statuses and transport failures.
        unclassified: Outcomes in none of the above classes.
        by_status_code: Outcome count per literal status code.
        by_service: Outcome count per service, in first-seen order.
        problematic: Outcomes with status 401 on routes not requiring auth.
    """

    total: int = 0
    successful: int = 0
    auth_failed: int = 0
    other_errors: int = 0
    unclassified: int = 0
    by_status_code: dict[int, int] = field(default_factory=dict)
    by_service: dict[str, int] = field(default_factory=dict)
    problematic: list[ProbeOutcome] = field(default_factory=list)

    def _rate(self, count: int) -> float:
        if self.total == 0:
            return 0.0
        return (count / self.total) * 100

    @property
    def success_rate(self) -> float:
        return self._rate(self.successful)

    @property
    def auth_failed_rate(self) -> float:
        return self._rate(self.auth_failed)

    @property
    def other_error_rate(self) -> float:
        return self._rate(self.other_errors)

    def record(self, outcome: ProbeOutcome) -> None:
        """Fold one outcome into the summary."""
        self.total += 1
        self.by_service[outcome.service] = self.by_service.get(outcome.service, 0) + 1
        self.by_status_code[outcome.status_code] = self.by_status_code.get(outcome.status_code, 0) + 1

        klass = classify(outcome)
        if klass is OutcomeClass.SUCCESS:
            self.successful += 1
        elif klass is OutcomeClass.AUTH_FAILED:
            self.auth_failed += 1
        elif klass is OutcomeClass.OTHER_ERROR:
            self.other_errors += 1
        else:
            self.unclassified += 1

        if is_problematic(outcome):
            self.problematic.append(outcome)

    def to_dict(self) -> dict[str, Any]:
        """Convert summary to dictionary for serialization."""
        return {
            "total": self.total,
            "successful": self.successful,
            "auth_failed": self.auth_failed,
            "other_errors": self.other_errors,
            "unclassified": self.unclassified,
            "success_rate": round(self.success_rate, 1),
            "auth_failed_rate": round(self.auth_failed_rate, 1),
            "other_error_rate": round(self.other_error_rate, 1),
            "by_status_code": {str(code): count for code, count in sorted(self.by_status_code.items())},
            "by_service": dict(self.by_service),
            "problematic": [
                {"method": o.method, "path": o.path, "service": o.service, "route": o.route} for o in self.problematic
            ],
        }


def summarize(outcomes: Iterable[ProbeOutcome]) -> RunSummary:
    """Aggregate outcomes into a RunSummary.

    Args:
        outcomes: Outcomes in execution order.

    Returns:
        The aggregated summary.
    """
    summary = RunSummary()
    for outcome in outcomes:
        summary.record(outcome)
    return summary
