"""Tests for the auth event stream and its subscriptions."""

import pytest
from storefront.auth import AuthEvent, AuthEventStream, Session
from storefront.cart.store import Subject

ANA = Session(user_id="user-001", email="ana@example.com")


class TestSubscription:
    def test_first_event_is_initial_session(self):
        stream = AuthEventStream(session=ANA)
        assert list(stream.subscribe()) == [(AuthEvent.INITIAL_SESSION, ANA)]

    def test_initial_session_without_user(self):
        assert list(AuthEventStream().subscribe()) == [(AuthEvent.INITIAL_SESSION, None)]

    def test_events_are_delivered_in_order(self):
        stream = AuthEventStream()
        subscription = stream.subscribe()
        stream.sign_in(ANA)
        stream.sign_out()
        assert [event for event, _ in subscription] == [
            AuthEvent.INITIAL_SESSION,
            AuthEvent.SIGNED_IN,
            AuthEvent.SIGNED_OUT,
        ]

    def test_iteration_drains(self):
        subscription = AuthEventStream().subscribe()
        list(subscription)
        assert list(subscription) == []

    def test_unsubscribe_drops_queued_events(self):
        stream = AuthEventStream()
        subscription = stream.subscribe()
        stream.sign_in(ANA)
        subscription.unsubscribe()
        stream.sign_out()
        assert list(subscription) == []
        assert subscription.active is False

    def test_context_manager_unsubscribes(self):
        stream = AuthEventStream()
        with stream.subscribe() as subscription:
            pass
        stream.sign_in(ANA)
        assert list(subscription) == []


class TestSessionState:
    def test_sign_in_sets_session(self):
        stream = AuthEventStream()
        stream.sign_in(ANA)
        assert stream.session == ANA

    def test_sign_out_clears_session(self):
        stream = AuthEventStream(session=ANA)
        subscription = stream.subscribe()
        stream.sign_out()
        assert stream.session is None
        assert list(subscription)[-1] == (AuthEvent.SIGNED_OUT, None)


class TestSubject:
    def test_guest(self):
        assert Subject.guest().is_guest
        assert Subject.guest().key == "guest"

    def test_user(self):
        subject = Subject.user("user-001")
        assert not subject.is_guest
        assert subject.key == "user:user-001"

    def test_parse(self):
        assert Subject.parse("guest") == Subject.guest()
        assert Subject.parse("user:user-001") == Subject.user("user-001")

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Subject.parse("admin")

    def test_user_needs_id(self):
        with pytest.raises(ValueError):
            Subject.user("")
