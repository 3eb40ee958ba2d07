"""Tests for the partner service."""

import asyncio
from datetime import timedelta

import pytest

from liftmates.errors import AuthenticationError, NotFoundError, PersistenceError
from liftmates.models.partner import PartnerStatus
from liftmates.models.workout import Difficulty, ExerciseSpec, WorkoutType
from liftmates.services.partners import PartnerService
from liftmates.services.users import UserService
from liftmates.services.workouts import WorkoutService
from liftmates.session import ANONYMOUS

from .conftest import NOW, _create_user


def profile_id(store, session) -> str:
    return asyncio.run(UserService(store).get_current_profile(session)).id


@pytest.fixture
def service(store):
    return PartnerService(store)


@pytest.fixture
def linked(store, service, alice, bob):
    """Alice invited Bob and Bob accepted."""
    link = asyncio.run(service.send_invite(alice, profile_id(store, bob)))
    asyncio.run(service.respond_to_invite(bob, link.id, PartnerStatus.ACCEPTED))
    return link


class TestInvites:
    """Tests for sending and answering invites."""

    def test_send_invite_is_pending(self, store, service, alice, bob):
        bob_id = profile_id(store, bob)
        link = asyncio.run(service.send_invite(alice, bob_id))

        assert link.status == PartnerStatus.PENDING
        assert link.user_id == profile_id(store, alice)
        assert link.partner_id == bob_id
        assert link.is_favorite is False
        assert link.created_at is not None

    def test_duplicate_invite_rejected(self, store, service, alice, bob):
        bob_id = profile_id(store, bob)
        asyncio.run(service.send_invite(alice, bob_id))
        with pytest.raises(PersistenceError):
            asyncio.run(service.send_invite(alice, bob_id))

    def test_reverse_invite_allowed(self, store, service, alice, bob):
        asyncio.run(service.send_invite(alice, profile_id(store, bob)))
        link = asyncio.run(service.send_invite(bob, profile_id(store, alice)))
        assert link.status == PartnerStatus.PENDING

    def test_invite_unknown_user(self, service, alice):
        with pytest.raises(NotFoundError):
            asyncio.run(service.send_invite(alice, "nobody"))

    def test_respond_accept(self, service, alice, bob, linked):
        partners = asyncio.run(service.get_partners(alice))
        assert partners["sent"][0].status == PartnerStatus.ACCEPTED

    def test_only_recipient_can_respond(self, store, service, alice, bob):
        link = asyncio.run(service.send_invite(alice, profile_id(store, bob)))
        with pytest.raises(NotFoundError):
            asyncio.run(service.respond_to_invite(alice, link.id, PartnerStatus.ACCEPTED))

    def test_respond_with_pending_rejected(self, store, service, alice, bob):
        link = asyncio.run(service.send_invite(alice, profile_id(store, bob)))
        with pytest.raises(ValueError):
            asyncio.run(service.respond_to_invite(bob, link.id, PartnerStatus.PENDING))

    def test_cancel_invite(self, store, service, alice, bob):
        link = asyncio.run(service.send_invite(alice, profile_id(store, bob)))
        asyncio.run(service.cancel_invite(alice, link.id))

        partners = asyncio.run(service.get_partners(bob))
        assert partners == {"sent": [], "received": []}

    def test_get_partners_lists_both_sides(self, store, service, alice, bob):
        carol = _create_user(store, "auth-carol", "Carol White", "carol")
        asyncio.run(service.send_invite(alice, profile_id(store, bob)))
        asyncio.run(service.send_invite(carol, profile_id(store, alice)))

        partners = asyncio.run(service.get_partners(alice))

        assert [link.other.username for link in partners["sent"]] == ["bobby"]
        assert [link.other.username for link in partners["received"]] == ["carol"]
        assert partners["received"][0].other.name == "Carol White"


class TestSearchUsers:
    """Tests for search_users."""

    def test_matches_name_or_username(self, store, service, alice, bob):
        _create_user(store, "auth-carol", "Carol Bobson", "carol")
        results = asyncio.run(service.search_users(alice, "bob"))
        assert {u.username for u in results} == {"bobby", "carol"}

    def test_case_insensitive(self, service, alice, bob):
        results = asyncio.run(service.search_users(alice, "JONES"))
        assert [u.username for u in results] == ["bobby"]

    def test_excludes_self_and_invited(self, store, service, alice, bob):
        asyncio.run(service.send_invite(alice, profile_id(store, bob)))
        assert asyncio.run(service.search_users(alice, "alice")) == []
        assert asyncio.run(service.search_users(alice, "bob")) == []

    def test_limit(self, store, service, alice):
        for i in range(5):
            _create_user(store, f"auth-{i}", f"Lifter {i}", f"lifter{i}")
        assert len(asyncio.run(service.search_users(alice, "lifter", limit=3))) == 3


class TestPartnerStats:
    """Tests for get_partner_stats."""

    def test_unknown_partner(self, service, alice):
        with pytest.raises(NotFoundError, match="Partner not found"):
            asyncio.run(service.get_partner_stats(alice, "missing", now=NOW))

    def test_aggregates_partner_week(self, store, service, alice, bob, linked):
        workouts = WorkoutService(store)
        squat = ExerciseSpec(name="Squat", body_part="Legs", target_sets=2, target_reps="5")

        done = asyncio.run(
            workouts.generate_workout(bob, WorkoutType.STRENGTH, Difficulty.HARD, [squat], now=NOW)
        )
        asyncio.run(
            workouts.generate_workout(
                bob, WorkoutType.STRENGTH, Difficulty.EASY, [squat], now=NOW - timedelta(days=1)
            )
        )
        # last week, outside the window
        asyncio.run(
            workouts.generate_workout(
                bob, WorkoutType.STRENGTH, Difficulty.EASY, [squat], now=NOW - timedelta(days=7)
            )
        )
        for s in done.exercises[0].sets:
            asyncio.run(workouts.log_set(bob, s.id, weight=100, reps=5, completed=True))
        asyncio.run(workouts.complete_workout(bob, done.id))

        stats = asyncio.run(service.get_partner_stats(alice, profile_id(store, bob), now=NOW))

        assert stats.name == "Bob Jones"
        assert stats.username == "bobby"
        assert stats.weekly_workouts == 2
        assert stats.completed_workouts == 1
        assert stats.total_weight == 200
        assert stats.completion_rate == 50
        assert stats.weekly_progress == [100, 0]
        assert stats.streak == 1
        assert stats.is_favorite is False

    def test_favorite_flag(self, store, service, alice, bob, linked):
        bob_id = profile_id(store, bob)
        asyncio.run(service.toggle_favorite_partner(alice, bob_id, True))

        stats = asyncio.run(service.get_partner_stats(alice, bob_id, now=NOW))
        assert stats.is_favorite is True
        assert stats.weekly_workouts == 0

    def test_favorite_requires_accepted_link(self, store, service, alice, bob):
        bob_id = profile_id(store, bob)
        asyncio.run(service.send_invite(alice, bob_id))
        asyncio.run(service.toggle_favorite_partner(alice, bob_id, True))

        partners = asyncio.run(service.get_partners(alice))
        assert partners["sent"][0].is_favorite is False

    def test_respond_requires_session_before_validation(self, service):
        with pytest.raises(AuthenticationError):
            asyncio.run(service.respond_to_invite(ANONYMOUS, "missing", PartnerStatus.PENDING))
