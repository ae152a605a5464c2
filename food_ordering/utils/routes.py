import os
import traceback

from flask import jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from food_ordering.core.exceptions import BusinessException, NotFound


def register_routes(app):

    @app.before_request
    def log_request():
        app.logger.info(
            f"{request.method} {request.path} | IP: {request.remote_addr}"
        )

    @app.errorhandler(BusinessException)
    def handle_business_exception(e):
        app.logger.warning(
            "RequestFailed | %s %s | status=%s | code=%s | reason=%s",
            request.method, request.path, e.status_code, e.code, e.message
        )
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({
            "success": False,
            "code": e.name.upper().replace(" ", "_"),
            "message": e.description,
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e):
        app.logger.error(
            "UnhandledException | %s %s | error=%s\n%s",
            request.method, request.path, str(e), traceback.format_exc()
        )
        return jsonify({
            "success": False,
            "code": "INTERNAL_ERROR",
            "message": "Internal server error"
        }), 500

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def frontend(path):
        """Serve the built single-page frontend, falling back to index.html"""
        if path.startswith("api/"):
            raise NotFound(code="ROUTE_NOT_FOUND", message="Route not found")

        dist_dir = app.config.get("CLIENT_DIST_DIR")
        if not dist_dir or not os.path.isfile(os.path.join(dist_dir, "index.html")):
            raise NotFound(code="FRONTEND_NOT_BUILT", message="Frontend bundle is not available")

        if path and os.path.isfile(os.path.join(dist_dir, path)):
            return send_from_directory(dist_dir, path)
        return send_from_directory(dist_dir, "index.html")
