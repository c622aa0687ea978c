from .page import _iso


def normalize_page_version(version, include_content=False):
    data = {
        "id": version.id,
        "page_id": version.page_id,
        "version": version.version,
        "title": version.title,
        "created_by": version.created_by,
        "created_at": _iso(version.created_at),
    }

    if include_content:
        data["content_tree"] = version.content_tree or {}
        data["seo"] = version.seo

    return data
