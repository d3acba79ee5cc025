"""Authentication state as an event stream.

The hosted auth provider reports session changes as ``(event, session)``
pairs. Each subscriber gets its own queue; iterating a subscription yields
the pairs delivered since the last iteration. Unsubscribing drops anything
still queued, so a component that has gone away never acts on a late event.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class AuthEvent(Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


@dataclass(frozen=True)
class Session:
    user_id: str
    email: str | None = None
    access_token: str | None = None


class Subscription:
    def __init__(self, stream: "AuthEventStream") -> None:
        self._stream = stream
        self._pending: deque[tuple[AuthEvent, Session | None]] = deque()
        self.active = True

    def _deliver(self, event: AuthEvent, session: Session | None) -> None:
        if self.active:
            self._pending.append((event, session))

    def __iter__(self):
        while self.active and self._pending:
            yield self._pending.popleft()

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._pending.clear()
        self._stream._detach(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class AuthEventStream:
    def __init__(self, session: Session | None = None) -> None:
        self._session = session
        self._subscriptions: list[Subscription] = []

    @property
    def session(self) -> Session | None:
        return self._session

    def subscribe(self) -> Subscription:
        """Subscribe to auth changes. The first pair is always INITIAL_SESSION with the current session."""
        subscription = Subscription(self)
        self._subscriptions.append(subscription)
        subscription._deliver(AuthEvent.INITIAL_SESSION, self._session)
        return subscription

    def _detach(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def publish(self, event: AuthEvent, session: Session | None) -> None:
        self._session = None if event == AuthEvent.SIGNED_OUT else session
        logger.debug("Auth state changed", auth_event=event.value, user_id=session.user_id if session else None)
        for subscription in list(self._subscriptions):
            subscription._deliver(event, self._session)

    def sign_in(self, session: Session) -> None:
        self.publish(AuthEvent.SIGNED_IN, session)

    def sign_out(self) -> None:
        self.publish(AuthEvent.SIGNED_OUT, None)
