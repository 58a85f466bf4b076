"""
rules/verify.py — Exhaustive self-test of RULE_TREE.

Walks every reachable (subject, verb, object, additional digit) combination
and checks that the resulting rule is playable:

    - at least one valid time, and not every time valid
    - the smallest valid time is 20 or less (reachable before time runs out)
    - some valid time between 19 and 64 exists (not only last-second answers)

Times are checked over 00..80, the numbers the module countdown can
actually show. A combination that passes there also passes over 00..99.

This is an offline check. Run it with:
    python main.py --verify-rules
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from statistics import mean

from rules.generator import resolve_additional_digit, valid_times_for
from rules.tree import EXTRA_CANDIDATES, RULE_TREE

logger = logging.getLogger(__name__)

REACHABLE_TIMES: tuple[int, ...] = tuple(range(0, 81))

MAX_FIRST_VALID_TIME = 20
MIN_LATE_VALID_TIME  = 19
LATE_WINDOW_END      = 65


@dataclass
class VerificationReport:
    """Outcome of verify_all_rules().

    Attributes:
        issues:                 One message per failed check.
        combinations:           Number of combinations evaluated.
        mean_valid_count:       Average number of valid times per combination.
        mean_valid_under_30:    Average number of valid times below 30.
    """
    issues:              list[str] = field(default_factory=list)
    combinations:        int = 0
    mean_valid_count:    float = 0.0
    mean_valid_under_30: float = 0.0

    @property
    def passed(self) -> bool:
        return not self.issues


def check_times(valid: list[int], times: tuple[int, ...] = REACHABLE_TIMES) -> list[str]:
    """Return the playability problems of one valid-time list."""
    problems = []
    if not valid:
        return ["has no valid times"]
    if min(valid) > MAX_FIRST_VALID_TIME:
        problems.append(f"has min release time of over {MAX_FIRST_VALID_TIME}")
    late = [t for t in valid if t < LATE_WINDOW_END]
    if not late or max(late) < MIN_LATE_VALID_TIME:
        problems.append(
            f"has a max release of under {MIN_LATE_VALID_TIME} among those under {LATE_WINDOW_END}"
        )
    if set(times) <= set(valid):
        problems.append("has all times valid")
    return problems


def verify_all_rules(times: tuple[int, ...] = REACHABLE_TIMES) -> VerificationReport:
    """Evaluate every reachable rule combination and collect issues.

    Returns:
        A VerificationReport. report.passed is True when no issue was found.
    """
    logger.info("Starting the test of all possible rules")
    report = VerificationReport()
    counts: list[int] = []
    counts_under_30: list[int] = []

    for subject_node in RULE_TREE:
        for verb_node in subject_node.verbs:
            for object_node in verb_node.objects:
                for candidate in EXTRA_CANDIDATES[object_node.extra]:
                    additional = resolve_additional_digit(object_node.kind, candidate)
                    valid = valid_times_for(
                        subject_node.kind, verb_node.kind, object_node.kind, additional, times,
                    )
                    report.combinations += 1
                    counts.append(len(valid))
                    counts_under_30.append(sum(1 for t in valid if t < 30))

                    label = f"{subject_node.kind.name} {verb_node.kind.name} {object_node.kind.name}"
                    if additional is not None:
                        label += f" (or) {additional}"
                    for problem in check_times(valid, times):
                        message = f"{label} {problem}"
                        logger.warning("ISSUE: %s", message)
                        report.issues.append(message)

    if counts:
        report.mean_valid_count = mean(counts)
        report.mean_valid_under_30 = mean(counts_under_30)

    if report.passed:
        logger.info("All %d combinations passed", report.combinations)
    logger.info("Average release times count: %.2f", report.mean_valid_count)
    logger.info("Average release times count (29 ticks or less): %.2f", report.mean_valid_under_30)
    return report
