from flask import request, jsonify
from flask_jwt_extended import jwt_required
from content_service.application.cms.versions import get_version, compare_versions
from content_service.domain.exceptions import ValidationError
from content_service.normalizers.page_version import normalize_page_version
from . import v1_bp


@v1_bp.route("/versions/compare", methods=["GET"])
@jwt_required()
def compare_versions_view():
    version_a = request.args.get("a")
    version_b = request.args.get("b")

    if not version_a or not version_b:
        raise ValidationError("Both 'a' and 'b' version ids are required")

    return jsonify(compare_versions(version_a, version_b))


@v1_bp.route("/versions/<version_id>", methods=["GET"])
@jwt_required()
def get_version_view(version_id):
    return jsonify(
        normalize_page_version(get_version(version_id), include_content=True)
    )
