"""Client state layer: API wrapper, auth session and workout cache."""

from .api import ApiError, FitnessApiClient
from .notifications import ConsoleNotifier, Notification, NotificationLevel, Notifier
from .session import AuthSession
from .store import WorkoutStore
from .views import SortOrder, WorkoutSummary, search_workouts, sort_workouts, summarize_workouts

__all__ = [
    "ApiError",
    "FitnessApiClient",
    "ConsoleNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "AuthSession",
    "WorkoutStore",
    "SortOrder",
    "WorkoutSummary",
    "search_workouts",
    "sort_workouts",
    "summarize_workouts",
]
