"""Per-session identity context: auth user, session and profile row.

One :class:`IdentityContext` exists per browser session. It subscribes to the
backend's auth notifications, so sign-in, sign-out and token refresh events
update the held identity without any caller polling for it.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from enum import Enum
from typing import Any, Callable

from supabase import Client

from ..constants import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_IDLE_SECONDS
from ..gateway import auth as auth_gateway
from ..gateway import profiles as profiles_gateway
from .errors import AuthenticationRequired, RemoteCallFailed
from .validation import validate_credentials

logger = logging.getLogger(__name__)


class IdentityState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING_PROFILE = "loading-profile"
    AUTHENTICATED_WITH_PROFILE = "authenticated-with-profile"
    AUTHENTICATED_WITHOUT_PROFILE = "authenticated-without-profile"


def _user_id(user: Any) -> str | None:
    return getattr(user, "id", None) if user is not None else None


class IdentityContext:
    """Holds the authenticated identity of one browser session."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.user: Any = None
        self.session: Any = None
        self.profile: dict[str, Any] | None = None
        self.loading = True
        self._profile_pending = False
        self._settled = threading.Event()
        self._lock = threading.RLock()
        self._subscription: Any = None
        self._started = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Subscribe to auth changes and resolve the existing session once."""

        with self._lock:
            if self._started:
                return
            self._started = True

        self._subscription = auth_gateway.subscribe(self.client, self._on_auth_event)
        result = auth_gateway.get_session(self.client)
        if result.error is not None:
            self._apply_session(None)
            return
        self._apply_session(result.data)

    def close(self) -> None:
        subscription = self._subscription
        self._subscription = None
        if subscription is not None:
            subscription.unsubscribe()

    def _on_auth_event(self, event: Any, session: Any) -> None:
        logger.info("Auth state changed: %s", getattr(event, "value", event))
        self._apply_session(session)

    def _apply_session(self, session: Any) -> None:
        user = getattr(session, "user", None) if session is not None else None
        with self._lock:
            self.session = session
            self.user = user
            # Consumers may observe the user before its profile row arrives.
            self.loading = False
            if user is None:
                self.profile = None
                self._profile_pending = False
                self._settled.set()
                return
            self._profile_pending = True
            self._settled.clear()
        self.load_profile(user.id)

    def load_profile(self, user_id: str) -> dict[str, Any] | None:
        result = profiles_gateway.get_profile(self.client, user_id)
        with self._lock:
            if _user_id(self.user) != user_id:
                # A newer auth event replaced the user while the fetch ran.
                return self.profile
            if result.error is not None:
                if result.error.not_found:
                    logger.warning("No profile row for user %s", user_id)
                self.profile = None
            else:
                self.profile = result.data
            self._profile_pending = False
            self._settled.set()
            return self.profile

    def wait_settled(self, timeout: float | None = None) -> bool:
        """Block until the session and profile lookups have resolved."""

        return self._settled.wait(timeout)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> IdentityState:
        with self._lock:
            if self.loading:
                # The stored session has not been resolved yet.
                return IdentityState.LOADING_PROFILE
            if self.user is None:
                return IdentityState.UNAUTHENTICATED
            if self._profile_pending:
                return IdentityState.LOADING_PROFILE
            if self.profile is None:
                return IdentityState.AUTHENTICATED_WITHOUT_PROFILE
            return IdentityState.AUTHENTICATED_WITH_PROFILE

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return _user_id(self.user)

    @property
    def email(self) -> str:
        return getattr(self.user, "email", None) or ""

    @property
    def user_metadata(self) -> dict[str, Any]:
        return dict(getattr(self.user, "user_metadata", None) or {})

    def require_user(self) -> Any:
        if self.user is None:
            raise AuthenticationRequired()
        return self.user

    def set_profile(self, profile: dict[str, Any] | None) -> None:
        with self._lock:
            self.profile = profile
            self._profile_pending = False
            self._settled.set()

    def clear(self) -> None:
        with self._lock:
            self.user = None
            self.session = None
            self.profile = None
            self._profile_pending = False
            self.loading = False
            self._settled.set()

    # ------------------------------------------------------------------
    # Auth actions
    # ------------------------------------------------------------------
    def sign_in(self, email: str, password: str) -> Any:
        email, password = validate_credentials(email, password)
        result = auth_gateway.sign_in(self.client, email, password)
        if result.error is not None:
            raise RemoteCallFailed("auth.sign_in_failed", error=result.error)
        self._adopt(result.data)
        return self.user

    def sign_up(self, email: str, password: str, full_name: str) -> Any:
        """Register a new identity; returns the user (session may be absent until email confirmation)."""

        email, password = validate_credentials(email, password, full_name=full_name, sign_up=True)
        result = auth_gateway.sign_up(self.client, email, password, full_name.strip())
        if result.error is not None:
            raise RemoteCallFailed("auth.sign_up_failed", error=result.error)
        response = result.data
        if getattr(response, "session", None) is not None:
            self._adopt(response)
        return getattr(response, "user", None)

    def _adopt(self, response: Any) -> None:
        session = getattr(response, "session", None)
        user = getattr(response, "user", None) or getattr(session, "user", None)
        # The auth notification usually lands first; skip a second profile fetch.
        if user is not None and _user_id(user) == self.user_id and not self._profile_pending:
            return
        self._apply_session(session)

    def sign_out(self) -> bool:
        """Clear local identity state, then ask the backend to end the session.

        Always reports success: the local state is gone whatever the remote says.
        """

        self.clear()
        result = auth_gateway.sign_out(self.client)
        if result.error is not None:
            logger.warning("Remote sign-out failed; local session already cleared")
        return True


class IdentityRegistry:
    """Maps session cookies to their :class:`IdentityContext`.

    Only sessions that signed in (or tried to) own a context. Every other
    request shares one unauthenticated guest context. Owned contexts expire
    after ``idle_timeout`` seconds without use, and the least recently used
    ones are closed once more than ``max_contexts`` are held.
    """

    def __init__(
        self,
        client_factory: Callable[[], Client],
        *,
        max_contexts: int = DEFAULT_MAX_SESSIONS,
        idle_timeout: float = DEFAULT_SESSION_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client_factory = client_factory
        self._max_contexts = max_contexts
        self._idle_timeout = idle_timeout
        self._clock = clock
        # Ordered oldest use first.
        self._contexts: OrderedDict[str, tuple[IdentityContext, float]] = OrderedDict()
        self._guest: IdentityContext | None = None
        self._lock = threading.Lock()

    def guest(self) -> IdentityContext:
        """The shared context for sessions that never signed in."""

        with self._lock:
            if self._guest is None:
                self._guest = IdentityContext(self._client_factory())
            guest = self._guest
        guest.start()
        return guest

    def get(self, key: str) -> IdentityContext | None:
        with self._lock:
            expired = self._prune()
            entry = self._contexts.get(key)
            if entry is not None:
                self._contexts[key] = (entry[0], self._clock())
                self._contexts.move_to_end(key)
        self._close_all(expired)
        return entry[0] if entry is not None else None

    def resolve(self, key: str) -> IdentityContext:
        """The session's own context, or the guest context when it has none."""

        return self.get(key) or self.guest()

    def get_or_create(self, key: str) -> IdentityContext:
        """Give ``key`` its own context, creating one before a sign-in."""

        with self._lock:
            expired = self._prune()
            entry = self._contexts.get(key)
            context = entry[0] if entry is not None else IdentityContext(self._client_factory())
            self._contexts[key] = (context, self._clock())
            self._contexts.move_to_end(key)
            while len(self._contexts) > self._max_contexts:
                _, (evicted, _) = self._contexts.popitem(last=False)
                expired.append(evicted)
        if expired:
            logger.info("Closing %d idle identity contexts", len(expired))
        self._close_all(expired)
        context.start()
        return context

    def discard(self, key: str) -> None:
        with self._lock:
            entry = self._contexts.pop(key, None)
        if entry is not None:
            entry[0].close()

    def close(self) -> None:
        with self._lock:
            contexts = [context for context, _ in self._contexts.values()]
            if self._guest is not None:
                contexts.append(self._guest)
            self._contexts.clear()
            self._guest = None
        self._close_all(contexts)

    def _prune(self) -> list[IdentityContext]:
        """Pop contexts idle past the timeout; the caller holds the lock."""

        cutoff = self._clock() - self._idle_timeout
        expired: list[IdentityContext] = []
        while self._contexts:
            key, (context, last_used) = next(iter(self._contexts.items()))
            if last_used > cutoff:
                break
            del self._contexts[key]
            expired.append(context)
        return expired

    @staticmethod
    def _close_all(contexts: list[IdentityContext]) -> None:
        for context in contexts:
            context.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)


__all__ = ["IdentityState", "IdentityContext", "IdentityRegistry"]
