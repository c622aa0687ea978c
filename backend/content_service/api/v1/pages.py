# content_service/api/v1/pages.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from content_service.application.cms.create_page import create_page
from content_service.application.cms.update_page import update_page
from content_service.application.cms.delete_page import delete_page
from content_service.application.cms.publish_page import publish_page
from content_service.application.cms.unpublish_page import unpublish_page
from content_service.application.cms.rollback_page import rollback_page
from content_service.application.cms.query_page import get_page, get_page_by_path, list_pages
from content_service.application.cms.versions import list_versions
from content_service.domain.exceptions import ValidationError
from content_service.normalizers.page import normalize_page
from content_service.normalizers.page_version import normalize_page_version
from content_service.normalizers.pagination import normalize_pagination
from content_service.utils.decorators import roles_required, current_actor_id, EDITOR_ROLES, ADMIN_ROLES
from content_service.utils.optimistic_lock import expected_version_from_request
from . import v1_bp # import the versioned blueprint


def page_response(page, status_code=200):
    """Page JSON with its version as the ETag, for use in a later If-Match."""
    response = jsonify(normalize_page(page))
    response.status_code = status_code
    response.set_etag(str(page.version))
    return response


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _bool_arg(name):
    raw = request.args.get(name)
    if raw is None:
        return None
    return raw.lower() in ("1", "true", "yes")


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
def list_pages_view():
    pagination = list_pages(
        page=request.args.get("page", type=int),
        limit=request.args.get("limit", type=int),
        status=request.args.get("status"),
        is_template=_bool_arg("is_template"),
        sort_by=request.args.get("sort_by", "updated_at"),
        sort_order=request.args.get("sort_order", "desc"),
    )

    return jsonify(
        normalize_pagination(
            pagination,
            lambda p: normalize_page(p, include_content=False)
        )
    )


@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def create_page_view():
    data = _json_body()

    page = create_page(
        title=data.get("title"),
        path=data.get("path"),
        content_tree=data.get("content_tree"),
        seo=data.get("seo"),
        is_template=data.get("is_template", False),
        template_name=data.get("template_name"),
        parent_id=data.get("parent_id"),
        actor_id=current_actor_id(),
    )

    return page_response(page, 201)


@v1_bp.route("/pages/by-path", methods=["GET"])
@jwt_required()
def get_page_by_path_view():
    return page_response(get_page_by_path(request.args.get("path")))


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
def get_page_view(page_id):
    return page_response(get_page(page_id))


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def update_page_view(page_id):
    data = _json_body()

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    expected_version = expected_version_from_request(data, required=True)
    patch = {k: v for k, v in data.items() if k != "expected_version"}

    page = update_page(
        page_id=page_id,
        actor_id=current_actor_id(),
        data=patch,
        expected_version=expected_version,
    )

    return page_response(page)


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*ADMIN_ROLES)
def delete_page_view(page_id):
    delete_page(page_id=page_id, actor_id=current_actor_id())
    return "", 204


@v1_bp.route("/pages/<page_id>/publish", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def publish_page_view(page_id):
    page = publish_page(page_id=page_id, actor_id=current_actor_id())
    return page_response(page)


@v1_bp.route("/pages/<page_id>/unpublish", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def unpublish_page_view(page_id):
    page = unpublish_page(page_id=page_id, actor_id=current_actor_id())
    return page_response(page)


# ------------------------
# Versions
# ------------------------

@v1_bp.route("/pages/<page_id>/versions", methods=["GET"])
@jwt_required()
def list_versions_view(page_id):
    pagination = list_versions(
        page_id=page_id,
        page=request.args.get("page", type=int),
        limit=request.args.get("limit", type=int),
    )

    return jsonify(normalize_pagination(pagination, normalize_page_version))


@v1_bp.route("/pages/<page_id>/rollback/<int:version>", methods=["POST"])
@jwt_required()
@roles_required(*ADMIN_ROLES)
def rollback_page_view(page_id, version):
    page = rollback_page(
        page_id=page_id,
        rollback_version=version,
        actor_id=current_actor_id(),
        expected_version=expected_version_from_request(_json_body(), required=True),
    )

    return page_response(page)
