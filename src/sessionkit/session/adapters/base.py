"""Persistence adapter contract for session storage."""

from abc import ABC, abstractmethod

from sessionkit.session.state import Session


class SessionAdapter(ABC):
    """Pluggable backend that stores session data between requests.

    Implementations must honour two rules:

    - ``load`` returns a session whose id equals the one requested, with
      empty data when nothing is stored. It never fails for "not found".
    - ``persist`` writes the full data mapping for ``session.id``. Calling it
      twice with the same state is harmless. It returns the session unchanged.

    Backend errors (I/O, network, serialization) propagate to the caller. The
    last ``persist`` to complete for an id wins; adapters that need stronger
    guarantees must provide them internally.
    """

    def accepts_id(self, session_id: str) -> bool:
        """Check whether this backend can store a session under ``session_id``.

        Ids come from client cookies; the binder treats a rejected id as absent
        and mints a new one.
        """
        return True

    @abstractmethod
    def load(self, session_id: str) -> Session:
        """Load the session stored under ``session_id``."""

    @abstractmethod
    def persist(self, session: Session) -> Session:
        """Store the full state of ``session``."""
