"""
Tests for WorkoutStore - the client-side workout cache.

Tests cover:
- fetch replaces the cache with the server's list
- create appends, update replaces by id, delete removes by id
- failed calls leave the cache untouched and notify
- operations without a session are refused
"""

import pytest

from fitness_trainer.client.api import FitnessApiClient
from fitness_trainer.client.notifications import NotificationLevel, Notifier
from fitness_trainer.client.session import AuthSession
from fitness_trainer.client.store import WorkoutStore


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def session(client, notifier, register):
    account = register()
    session = AuthSession(FitnessApiClient(http_client=client), notifier)
    session.restore(account["token"])
    return session


@pytest.fixture
def store(session):
    return WorkoutStore(session)


@pytest.fixture
def bob_headers(register):
    return register(email="bob@example.com", name="Bob")["headers"]


class TestFetch:
    """Tests for fetch_workouts."""

    def test_fetch_replaces_cache(self, store, client, leg_day):
        first = client.post("/api/workouts", json=leg_day, headers=store.session.api._headers()).json()
        second = client.post("/api/workouts", json=leg_day, headers=store.session.api._headers()).json()

        workouts = store.fetch_workouts()

        assert [w.id for w in workouts] == [second["id"], first["id"]]
        assert [w.id for w in store.workouts] == [second["id"], first["id"]]
        assert not store.is_loading
        assert store.error is None

    def test_fetch_failure_keeps_cache(self, store, leg_day, notifier):
        store.create_workout(leg_day)
        store.session.restore("expired-or-garbage")

        assert store.fetch_workouts() == []

        assert len(store.workouts) == 1
        assert store.error
        assert notifier.last.level == NotificationLevel.ERROR


class TestCreate:
    """Tests for create_workout."""

    def test_create_appends(self, store, leg_day, notifier):
        store.fetch_workouts()
        first = store.create_workout(leg_day)
        second = store.create_workout({**leg_day, "title": "Push Day"})

        assert [w.id for w in store.workouts] == [first.id, second.id]
        assert second.title == "Push Day"
        assert notifier.last.message == "Workout created successfully"

    def test_create_invalid_locally(self, store, leg_day, notifier):
        leg_day["exercises"] = []

        assert store.create_workout(leg_day) is None

        assert store.workouts == []
        assert store.error
        assert notifier.last.level == NotificationLevel.ERROR


class TestUpdate:
    """Tests for update_workout."""

    def test_update_replaces_by_id(self, store, leg_day, notifier):
        first = store.create_workout(leg_day)
        second = store.create_workout({**leg_day, "title": "Push Day"})

        updated = store.update_workout(first.id, {"title": "Leg Day (heavy)"})

        assert updated.title == "Leg Day (heavy)"
        assert [w.id for w in store.workouts] == [first.id, second.id]
        assert store.find(first.id).title == "Leg Day (heavy)"
        assert store.find(second.id).title == "Push Day"
        assert notifier.last.message == "Workout updated successfully"

    def test_update_forbidden_keeps_cache(self, store, client, leg_day, bob_headers, notifier):
        mine = store.create_workout(leg_day)
        theirs = client.post("/api/workouts", json=leg_day, headers=bob_headers).json()

        assert store.update_workout(theirs["id"], {"title": "Mine now"}) is None

        assert store.error == "Not authorized"
        assert notifier.last.message == "Not authorized"
        assert [w.id for w in store.workouts] == [mine.id]
        assert store.find(mine.id).title == "Leg Day"


class TestDelete:
    """Tests for delete_workout."""

    def test_delete_removes_by_id(self, store, leg_day, notifier):
        first = store.create_workout(leg_day)
        second = store.create_workout(leg_day)

        assert store.delete_workout(first.id)

        assert [w.id for w in store.workouts] == [second.id]
        assert notifier.last.message == "Workout deleted successfully"

    def test_delete_missing_keeps_cache(self, store, leg_day, notifier):
        kept = store.create_workout(leg_day)

        assert not store.delete_workout("does-not-exist")

        assert [w.id for w in store.workouts] == [kept.id]
        assert store.error == "Workout not found"


class TestGet:
    """Tests for get_workout."""

    def test_get_does_not_touch_cache(self, store, client, leg_day):
        created = client.post(
            "/api/workouts", json=leg_day, headers=store.session.api._headers()
        ).json()

        workout = store.get_workout(created["id"])

        assert workout.id == created["id"]
        assert store.workouts == []


class TestWithoutSession:
    """Operations are refused when nobody is logged in."""

    def test_refused(self, client, leg_day):
        notifier = Notifier()
        store = WorkoutStore(AuthSession(FitnessApiClient(http_client=client), notifier))

        assert store.fetch_workouts() == []
        assert store.create_workout(leg_day) is None
        assert not store.delete_workout("x")

        messages = [n.message for n in notifier.recent]
        assert messages == [
            "You must be logged in to view workouts",
            "You must be logged in to create a workout",
            "You must be logged in to delete a workout",
        ]

    def test_clear(self, store, leg_day):
        store.create_workout(leg_day)
        store.clear()
        assert store.workouts == []
