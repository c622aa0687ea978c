from flask import request, jsonify
from flask_jwt_extended import jwt_required
from content_service.application.cms.redirects import (
    upsert_redirect,
    resolve_redirect,
    delete_redirect,
    list_redirects,
)
from content_service.domain.exceptions import ValidationError
from content_service.normalizers.pagination import normalize_pagination
from content_service.normalizers.redirect import normalize_redirect
from content_service.utils.decorators import roles_required, current_actor_id, ADMIN_ROLES
from . import v1_bp


@v1_bp.route("/redirects/resolve", methods=["GET"])
def resolve_redirect_view():
    # Public: storefronts call this for every unknown path
    path = request.args.get("path")
    if not path:
        raise ValidationError("path is required")

    target = resolve_redirect(path)
    if target is None:
        return jsonify(None), 404
    return jsonify(target)


@v1_bp.route("/redirects", methods=["GET"])
@jwt_required()
@roles_required(*ADMIN_ROLES)
def list_redirects_view():
    pagination = list_redirects(
        page=request.args.get("page", type=int),
        limit=request.args.get("limit", type=int),
    )
    return jsonify(normalize_pagination(pagination, normalize_redirect))


@v1_bp.route("/redirects", methods=["POST"])
@jwt_required()
@roles_required(*ADMIN_ROLES)
def upsert_redirect_view():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    if not data.get("from_path") or not data.get("to_path"):
        raise ValidationError("from_path and to_path are required")

    redirect = upsert_redirect(
        from_path=data["from_path"],
        to_path=data["to_path"],
        status_code=data.get("status_code", 301),
        actor_id=current_actor_id(),
    )

    return jsonify(normalize_redirect(redirect)), 201


@v1_bp.route("/redirects/<redirect_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*ADMIN_ROLES)
def delete_redirect_view(redirect_id):
    delete_redirect(redirect_id=redirect_id, actor_id=current_actor_id())
    return "", 204
