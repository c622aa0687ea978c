from .page import _iso


def normalize_redirect(redirect):
    return {
        "id": redirect.id,
        "from_path": redirect.from_path,
        "to_path": redirect.to_path,
        "status_code": redirect.status_code,
        "created_at": _iso(redirect.created_at),
        "updated_at": _iso(redirect.updated_at),
    }
