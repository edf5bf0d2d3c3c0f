"""Session state dataclass and reserved request parameter keys."""

from dataclasses import dataclass, field
from typing import Any

PARAMS_SESSION_KEY = "session"
PARAMS_FLASH_KEY = "flash"

# Reserved key under which a pending flash message lives in session data
FLASH_KEY = ":flash"

RequestParams = dict[str, Any]


@dataclass(frozen=True)
class Session:
    """A client's session identifier and its associated key/value state.

    The identifier is fixed for the lifetime of the object. ``data`` is
    mutated in place by the accessor and never reassigned; durability across
    requests is the persistence adapter's job.
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Session id must not be empty")

    def __hash__(self) -> int:
        # data is mutable; equal sessions always share an id
        return hash(self.id)
