"""Plain-text rendering of outcomes and run summaries."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from kong_route_tester.reporting.summary import OutcomeClass, classify

if TYPE_CHECKING:
    from kong_route_tester.execution.runner import ProbeOutcome
    from kong_route_tester.reporting.summary import RunSummary

_PATH_WIDTH = 40
_MESSAGE_WIDTH = 50
_RULE = "=" * 80


def truncate(text: str, length: int) -> str:
    """Shorten ``text`` to ``length`` characters, ending in "..." when cut."""
    if len(text) <= length:
        return text
    return text[: max(length - 3, 0)] + "..."


def status_glyph(outcome: ProbeOutcome) -> str:
    if outcome.status_code >= 400 or outcome.error is not None:
        return "✗"
    if outcome.status_code == 0:
        return "○"
    return "✓"


class ConsoleReporter:
    """Prints per-probe lines and the final summary block."""

    def __init__(self, *, verbose: bool = False, stream: TextIO | None = None) -> None:
        self.verbose = verbose
        self.stream = stream if stream is not None else sys.stdout

    def _print(self, line: str = "") -> None:
        print(line, file=self.stream)

    def format_outcome(self, outcome: ProbeOutcome) -> str:
        auth = " [AUTH]" if outcome.requires_auth else ""
        line = (
            f"{status_glyph(outcome)} {outcome.service:<30} {truncate(outcome.path, _PATH_WIDTH):<40} "
            f"{outcome.method:<6} {outcome.status_code:>3}{auth}"
        )
        if outcome.error is not None:
            line += f" ERROR: {outcome.error}"
        elif outcome.message:
            line += f" - {truncate(outcome.message, _MESSAGE_WIDTH)}"
        return line

    def report_outcome(self, outcome: ProbeOutcome) -> None:
        """Print one outcome; successes are shown only in verbose mode."""
        if not self.verbose and classify(outcome) is OutcomeClass.SUCCESS:
            return
        self._print(self.format_outcome(outcome))

    def report_summary(self, summary: RunSummary) -> None:
        self._print()
        self._print(_RULE)
        self._print("SUMMARY")
        self._print(_RULE)

        self._print(f"Total Endpoints Tested: {summary.total}")
        self._print(f"Successful (2xx/3xx):   {summary.successful} ({summary.success_rate:.1f}%)")
        self._print(f"Auth Failed (401):      {summary.auth_failed} ({summary.auth_failed_rate:.1f}%)")
        self._print(f"Other Errors:           {summary.other_errors} ({summary.other_error_rate:.1f}%)")
        if summary.unclassified:
            self._print(f"Not Sent / No Status:   {summary.unclassified}")

        self._print()
        self._print("By Status Code:")
        for code, count in sorted(summary.by_status_code.items()):
            self._print(f"  {code}: {count}")

        self._print()
        self._print("By Service:")
        for service, count in summary.by_service.items():
            self._print(f"  {service:<30}: {count}")

        self._print()
        self._print("Potentially Problematic Routes (401 errors on unauthenticated routes):")
        if not summary.problematic:
            self._print("  None")
        for outcome in summary.problematic:
            self._print(f"  - {outcome.method} {outcome.path} ({outcome.service})")
