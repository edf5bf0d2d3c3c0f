"""One-shot flash messages carried across a single request boundary.

A flash value is stored in the session under a reserved key. When the next
request establishes its session the value is moved into the request
parameters and removed from the session, so each value is seen exactly once.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from sessionkit.session.accessor import SessionAccessor
from sessionkit.session.state import FLASH_KEY, PARAMS_FLASH_KEY, RequestParams, Session

if TYPE_CHECKING:
    from sessionkit.session.binder import CookieBinder

T = TypeVar("T")


def get_flash(params: RequestParams) -> Any:
    """Return the flash value for the current request, or ``""``."""
    return params.get(PARAMS_FLASH_KEY, "")


def set_flash(
    params: RequestParams,
    value: T,
    accessor: SessionAccessor,
    binder: "CookieBinder | None" = None,
) -> T:
    """Store ``value`` as the flash message.

    The value is persisted on the session for the next request and mirrored
    into ``params`` so the current request sees it too. With a binder, a
    session is started on the spot when ``params`` holds none.
    """
    accessor.set(accessor.current(params, binder), FLASH_KEY, value)
    params[PARAMS_FLASH_KEY] = value
    return value


def has_flash(params: RequestParams) -> bool:
    """Check if there's a flash message for the current request."""
    return get_flash(params) != ""


def drain_flash(session: Session, params: RequestParams, accessor: SessionAccessor) -> Any:
    """Move a pending flash value from the session into ``params``.

    The reserved key is removed from the session and the removal persisted
    whenever it is present, whatever its value. ``params`` receives ``""``
    when nothing is pending or the stored value is ``None``.

    Returns:
        The drained value, or ``""``.
    """
    if not accessor.isset(session, FLASH_KEY):
        params[PARAMS_FLASH_KEY] = ""
        return ""

    value = accessor.get(session, FLASH_KEY)
    accessor.unset(session, FLASH_KEY)
    if value is None:
        value = ""
    params[PARAMS_FLASH_KEY] = value
    return value
