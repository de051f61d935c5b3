from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from content_blocks.domain.invariants.exceptions import InvariantViolation
from content_blocks.domain.exceptions import BlockControllerNotFound, MissingTemplateError


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(MissingTemplateError)
    def handle_missing_template(error):
        current_app.logger.error("Missing block template: %s", error)
        response = jsonify({
            "error": "MissingTemplate",
            "message": str(error)
        })
        response.status_code = 500
        return response

    @app.errorhandler(BlockControllerNotFound)
    def handle_missing_controller(error):
        current_app.logger.error("Block type misconfigured: %s", error)
        response = jsonify({
            "error": "BlockControllerNotFound",
            "message": str(error)
        })
        response.status_code = 500
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
