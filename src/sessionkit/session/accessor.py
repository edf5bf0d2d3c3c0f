"""Read and write access to session data with write-through persistence."""

import logging
from typing import TYPE_CHECKING, Any

from starlette.requests import Request
from starlette.responses import Response

from sessionkit.session.adapters.base import SessionAdapter
from sessionkit.session.errors import SessionNotStartedError
from sessionkit.session.state import PARAMS_SESSION_KEY, RequestParams, Session

if TYPE_CHECKING:
    from sessionkit.session.binder import CookieBinder

logger = logging.getLogger(__name__)


class SessionAccessor:
    """Typed get/set/unset/isset operations over session data.

    Every mutation is persisted through the adapter before the call returns.
    There is no batching: a failing ``persist`` leaves the in-memory session
    mutated while the store is unchanged, and the error propagates.
    """

    def __init__(self, adapter: SessionAdapter) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> SessionAdapter:
        """The persistence adapter mutations are written through."""
        return self._adapter

    def get(self, session: Session, key: str, default: Any = None) -> Any:
        """Return the value stored as ``key``, or ``default`` when absent."""
        return session.data.get(key, default)

    def get_or_set(self, session: Session, key: str, default: Any) -> Any:
        """Return the value stored as ``key``, storing ``default`` first if absent.

        Args:
            session: The session to read.
            key: The data key.
            default: Value stored and returned when the key is absent.

        Returns:
            The existing value, or ``default``.
        """
        if key in session.data:
            return session.data[key]

        self.set(session, key, default)
        return default

    def set(self, session: Session, key: str, value: Any) -> Session:
        """Store ``value`` as ``key`` and persist the session."""
        session.data[key] = value
        self._adapter.persist(session)

        return session

    def unset(self, session: Session, key: str) -> Session:
        """Remove ``key`` from the session and persist the session.

        Removing a missing key is not an error; the session is still persisted
        so the stored state matches memory.
        """
        session.data.pop(key, None)
        self._adapter.persist(session)

        return session

    @staticmethod
    def isset(session: Session | None, key: str) -> bool:
        """Check whether ``key`` exists on ``session``."""
        return session is not None and key in session.data

    def get_current(self, params: RequestParams, key: str, default: Any = None) -> Any:
        """Like ``get``, on the session held in ``params``."""
        return self.get(self.current(params), key, default)

    def set_current(self, params: RequestParams, key: str, value: Any) -> Session:
        """Like ``set``, on the session held in ``params``."""
        return self.set(self.current(params), key, value)

    def unset_current(self, params: RequestParams, key: str) -> Session:
        """Like ``unset``, on the session held in ``params``."""
        return self.unset(self.current(params), key)

    def isset_current(self, params: RequestParams, key: str) -> bool:
        """Like ``isset``; false when ``params`` holds no session."""
        return self.isset(params.get(PARAMS_SESSION_KEY), key)

    def current(
        self,
        params: RequestParams,
        binder: "CookieBinder | None" = None,
        request: Request | None = None,
        response: Response | None = None,
    ) -> Session:
        """Return the session associated with the current request.

        When ``params`` holds no session and a binder is given, a session is
        started on the spot against ``request`` and ``response`` (blank ones
        when omitted) and ``params`` is updated in place.

        Raises:
            SessionNotStartedError: If no session is available and no binder
                was supplied.
        """
        session = params.get(PARAMS_SESSION_KEY)
        if session is not None:
            return session

        if binder is None:
            raise SessionNotStartedError(
                "No session in request parameters; is the session middleware installed?"
            )

        logger.debug("Starting session lazily for current request")
        if request is None:
            request = Request({"type": "http", "headers": []})
        if response is None:
            response = Response()
        _, _, _, session = binder.start(request, response, params)
        return session
