def _iso(value):
    return value.isoformat() if value else None


def normalize_page(page, include_content=True):
    data = {
        "id": page.id,
        "title": page.title,
        "path": page.path,
        "status": page.status,
        "version": page.version,
        "published_at": _iso(page.published_at),
        "parent_id": page.parent_id,
        "position": page.position,
        "is_template": page.is_template,
        "template_name": page.template_name,
        "created_by": page.created_by,
        "created_at": _iso(page.created_at),
        "updated_at": _iso(page.updated_at),
    }

    if include_content:
        data["content_tree"] = page.content_tree or {}
        data["seo"] = page.seo

    return data
