from typing import Set

from ..exceptions import IllegalTransition

PAGE_STATUSES = ("draft", "review", "published", "archived")

# Explicit allowed state transitions
ALLOWED_PAGE_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published"},
    "review": {"published"},
    "archived": {"published"},
    "published": {"draft"},  # unpublish
}

TRANSITION_ERRORS: dict[str, str] = {
    "published": "Page is already published",
    "draft": "Page is not currently published",
}


def assert_page_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            TRANSITION_ERRORS.get(
                to_status,
                f"Illegal page transition: {from_status} -> {to_status}",
            )
        )
