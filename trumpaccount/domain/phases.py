from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from trumpaccount.models import ContributionPhase


class PhaseValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class PhaseCheck:
    errors: List[str]
    warnings: List[str]


def check_phases(
    phases: Sequence[ContributionPhase],
    start_age: int,
    end_age: int,
) -> PhaseCheck:
    """Report empty or overlapping phases (errors) and uncovered ages (warnings).

    The calculators take the first matching phase, so overlaps are legal for
    them; this check is for callers that want a clean schedule.
    """
    sorted_phases = sorted(phases, key=lambda phase: phase.fromAge)
    errors: List[str] = []
    warnings: List[str] = []

    previous_end: Optional[int] = None
    for phase in sorted_phases:
        start, end = phase.fromAge, phase.toAge

        if end <= start:
            errors.append(f"contribution phase invalid interval at age {start}")
            continue

        if previous_end is not None:
            if start < previous_end:
                errors.append(f"contribution phases overlap ages {start}-{min(previous_end, end)}")
            elif start > previous_end:
                warnings.append(f"contribution phases gap ages {previous_end}-{start}")
        elif start > start_age:
            warnings.append(f"contribution phases gap ages {start_age}-{start}")

        if start >= end_age or end <= start_age:
            warnings.append(f"contribution phase {start}-{end} is outside ages {start_age}-{end_age}")

        previous_end = end if previous_end is None else max(previous_end, end)

    if previous_end is not None and previous_end < end_age:
        warnings.append(f"contribution phases gap ages {previous_end}-{end_age}")

    return PhaseCheck(errors=errors, warnings=warnings)


def validate_phases(
    phases: Sequence[ContributionPhase],
    start_age: int,
    end_age: int,
) -> List[str]:
    """Raise PhaseValidationError on errors; return the warnings otherwise."""
    check = check_phases(phases, start_age, end_age)
    if check.errors:
        raise PhaseValidationError(check.errors)
    return check.warnings
