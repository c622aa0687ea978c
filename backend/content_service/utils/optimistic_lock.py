from typing import Any, Mapping, Optional
from flask import request, abort
from content_service.domain.exceptions import VersionConflict


def parse_version_tag(raw: Any) -> int:
    """
    Accept 3, "3", '"3"' or 'W/"3"' and return 3.
    """
    if isinstance(raw, bool):
        raise ValueError("Version must be an integer")
    if isinstance(raw, int):
        return raw

    tag = str(raw).strip()
    if tag.startswith("W/"):
        tag = tag[2:]
    return int(tag.strip('"'))


def expected_version_from_request(
    data: Optional[Mapping[str, Any]] = None,
    *,
    required: bool = False,
) -> Optional[int]:
    """
    Read the page version the client last observed.

    The If-Match header wins over an "expected_version" body field.
    Returns None when the client sent neither, unless required, in which
    case the request is answered with 428 Precondition Required.
    """
    raw = request.headers.get("If-Match")
    if raw is None and data:
        raw = data.get("expected_version")

    if raw is None:
        if required:
            abort(
                428,
                description="Send the page version you last read in If-Match "
                            "or as expected_version",
            )
        return None

    # "*" matches any version, which would make the check a no-op
    if isinstance(raw, str) and raw.strip() == "*":
        abort(400, description="If-Match: * is not accepted; send the page's ETag")

    try:
        return parse_version_tag(raw)
    except (TypeError, ValueError):
        abort(400, description="Invalid If-Match header or expected_version")


def enforce_expected_version(entity, expected_version: Optional[int]) -> None:
    """
    Raises VersionConflict if the entity moved past the version the caller saw.
    """
    if expected_version is None:
        return

    if entity.version != expected_version:
        raise VersionConflict(
            f"Page is at version {entity.version}, "
            f"but version {expected_version} was expected",
            expected=expected_version,
            actual=entity.version,
        )
