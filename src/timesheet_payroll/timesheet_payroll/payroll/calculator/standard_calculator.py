from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import hhmm_to_minutes
from ...core.constants import DEFAULT_NORMAL_HOURS_THRESHOLD
from ..model import ZERO_HOURS, WorkingHoursResult
from .base import WorkingHoursCalculator


def _span(start: Optional[int], end: Optional[int]) -> Optional[int]:
    if start is None or end is None:
        return None
    return max(end - start, 0)


def calculate_working_hours(
    clock_in: Optional[str],
    lunch_start: Optional[str],
    lunch_end: Optional[str],
    clock_out: Optional[str],
    *,
    normal_hours_threshold: float = DEFAULT_NORMAL_HOURS_THRESHOLD,
) -> WorkingHoursResult:
    """Hours worked on one day from its four clock events.

    Worked time is morning (clock_in -> lunch_start) plus afternoon
    (lunch_end -> clock_out), each counted when both its ends are present.
    When the break was not fully recorded but the day was closed, the whole
    clock_in -> clock_out span counts instead, so a day without a break is not
    penalised. Each span is clamped at zero and unparsable times count as
    absent; this function never raises.

    The first ``normal_hours_threshold`` hours are normal, the rest overtime.
    """

    start = hhmm_to_minutes(clock_in)
    if start is None:
        return ZERO_HOURS

    break_start = hhmm_to_minutes(lunch_start)
    break_end = hhmm_to_minutes(lunch_end)
    end = hhmm_to_minutes(clock_out)

    if (break_start is None or break_end is None) and end is not None:
        worked_minutes = _span(start, end) or 0
    else:
        worked_minutes = (_span(start, break_start) or 0) + (_span(break_end, end) or 0)

    total = worked_minutes / 60
    threshold = max(float(normal_hours_threshold), 0.0)
    normal = min(total, threshold)
    return WorkingHoursResult(
        total_hours=total,
        normal_hours=normal,
        overtime_hours=max(total - threshold, 0.0),
    )


class StandardWorkingHoursCalculator(WorkingHoursCalculator):
    """Standard rule: worked segments around the lunch break, overtime past the daily threshold."""

    def __init__(self, normal_hours_threshold: float = DEFAULT_NORMAL_HOURS_THRESHOLD):
        self._threshold = float(normal_hours_threshold)

    @property
    def normal_hours_threshold(self) -> float:
        return self._threshold

    def calculate(
        self,
        clock_in: Optional[str],
        lunch_start: Optional[str],
        lunch_end: Optional[str],
        clock_out: Optional[str],
        *,
        normal_hours_threshold: Optional[float] = None,
    ) -> WorkingHoursResult:
        threshold = self._threshold if normal_hours_threshold is None else normal_hours_threshold
        return calculate_working_hours(
            clock_in,
            lunch_start,
            lunch_end,
            clock_out,
            normal_hours_threshold=threshold,
        )
