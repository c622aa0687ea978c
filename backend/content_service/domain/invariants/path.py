import re
from typing import Optional

from slugify import slugify

from ..exceptions import ValidationError

# Lowercase segments of [a-z0-9] joined by single hyphens, "/" for the root page
PATH_PATTERN = re.compile(
    r"^/(?:[a-z0-9]+(?:-[a-z0-9]+)*(?:/[a-z0-9]+(?:-[a-z0-9]+)*)*)?$"
)
PUNCTUATION = re.compile(r"[^\w\s-]")

MAX_PATH_LENGTH = 200
MAX_TITLE_LENGTH = 200


def normalize_path(raw: str) -> str:
    """
    Normalize an explicit page path and validate it against PATH_PATTERN.

    Used for create, update and redirect paths alike.
    """
    if not isinstance(raw, str):
        raise ValidationError("Path must be a string")

    path = raw.strip().lower()
    if not path:
        raise ValidationError("Path must not be empty")

    if not path.startswith("/"):
        path = f"/{path}"

    if "//" in path:
        raise ValidationError(f"Invalid path: {raw!r}")

    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]

    if len(path) > MAX_PATH_LENGTH:
        raise ValidationError(
            f"Path must be at most {MAX_PATH_LENGTH} characters"
        )

    if not PATH_PATTERN.match(path):
        raise ValidationError(
            f"Invalid path: {raw!r}. Use lowercase letters, digits and "
            "hyphens separated by '/'"
        )

    return path


def derive_path(title: str) -> str:
    """Build a path from a title: "Hello World!" -> "/hello-world"."""
    slug = slugify(PUNCTUATION.sub("", title or ""))
    if not slug:
        raise ValidationError(f"Cannot derive a path from title {title!r}")

    return normalize_path(slug[:MAX_PATH_LENGTH - 1].rstrip("-"))


def resolve_path(title: str, path: Optional[str] = None) -> str:
    if path is None:
        return derive_path(title)
    return normalize_path(path)


def assert_title(title) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required")

    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be at most {MAX_TITLE_LENGTH} characters"
        )
    return title
