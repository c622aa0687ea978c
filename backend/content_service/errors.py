from flask import jsonify
from werkzeug.exceptions import HTTPException
from content_service.domain.exceptions import CmsError, VersionConflict

def register_error_handlers(app):
    @app.errorhandler(CmsError)
    def handle_cms_error(error):
        body = {
            "error": type(error).__name__,
            "message": error.message
        }

        if isinstance(error, VersionConflict):
            body["expected_version"] = error.expected
            body["current_version"] = error.actual

        response = jsonify(body)
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
