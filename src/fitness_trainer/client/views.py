"""
Read-only views over cached workouts.

Search, sort and the dashboard summary are pure functions of a workout list
(normally ``WorkoutStore.workouts``); none of them touch the server or the
cache.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from ..models.workouts import Workout

RECENT_LIMIT = 5


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    MOST_EXERCISES = "most-exercises"


def search_workouts(workouts: Iterable[Workout], term: Optional[str]) -> List[Workout]:
    """Workouts whose title or description contains ``term``, ignoring case.

    An empty or missing term matches everything.
    """
    needle = (term or "").strip().casefold()
    if not needle:
        return list(workouts)
    return [
        w for w in workouts
        if needle in w.title.casefold() or needle in (w.description or "").casefold()
    ]


def sort_workouts(
    workouts: Iterable[Workout],
    order: SortOrder | str = SortOrder.NEWEST,
) -> List[Workout]:
    """Return a sorted copy. Ties keep their incoming order."""
    order = SortOrder(order)
    if order is SortOrder.OLDEST:
        return sorted(workouts, key=lambda w: w.date)
    if order is SortOrder.TITLE_ASC:
        return sorted(workouts, key=lambda w: w.title.casefold())
    if order is SortOrder.TITLE_DESC:
        return sorted(workouts, key=lambda w: w.title.casefold(), reverse=True)
    if order is SortOrder.MOST_EXERCISES:
        return sorted(workouts, key=lambda w: len(w.exercises), reverse=True)
    return sorted(workouts, key=lambda w: w.date, reverse=True)


@dataclass
class WorkoutSummary:
    total_workouts: int
    workouts_this_month: int
    recent: List[Workout] = field(default_factory=list)


def summarize_workouts(
    workouts: Iterable[Workout],
    today: Optional[date] = None,
    recent_limit: int = RECENT_LIMIT,
) -> WorkoutSummary:
    """Totals for the dashboard.

    "This month" is the calendar month of ``today`` (default: the local date).
    ``recent`` holds the newest ``recent_limit`` workouts by workout date.
    """
    workouts = list(workouts)
    today = today or date.today()
    this_month = sum(
        1 for w in workouts
        if (w.date.year, w.date.month) == (today.year, today.month)
    )
    return WorkoutSummary(
        total_workouts=len(workouts),
        workouts_this_month=this_month,
        recent=sort_workouts(workouts, SortOrder.NEWEST)[:max(recent_limit, 0)],
    )
