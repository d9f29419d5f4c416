import os
import logging
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv
from http import HTTPStatus
from taskboard.boards import boards_bp
from taskboard.tasks import tasks_bp
from taskboard.store import TaskStore

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(os.getenv("LOG_FILE", "app.log")),
    ],
)
logger = logging.getLogger(__name__)


def create_app(store: TaskStore | None = None, config: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        FRONTEND_URL=os.getenv("FRONTEND_URL", "http://localhost:3000"),
        API_PREFIX=os.getenv("API_PREFIX", ""),
    )
    if config:
        app.config.update(config)

    CORS(
        app,
        resources={
            r"/*": {
                "origins": [app.config["FRONTEND_URL"]],
                "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "Accept", "Authorization"],
                "expose_headers": ["Content-Type"],
                "max_age": 86400,
            }
        },
    )

    # Handlers reach the store through current_app
    app.extensions["task_store"] = store if store is not None else TaskStore()

    # Global error handlers; unsupported methods answer like unmatched paths
    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(e):
        logger.warning(f"Not found: {request.method} {request.path}")
        return (
            jsonify({"error": "Endpoint not found", "code": "NOT_FOUND"}),
            HTTPStatus.NOT_FOUND,
        )

    @app.errorhandler(500)
    def internal_error(e):
        logger.error(f"Unhandled error on {request.method} {request.path}: {str(e)}")
        return (
            jsonify({"error": "Internal server error", "code": "INTERNAL_ERROR"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )

    # Register blueprints
    prefix = app.config["API_PREFIX"].rstrip("/")
    app.register_blueprint(boards_bp, url_prefix=f"{prefix}/boards")
    app.register_blueprint(tasks_bp, url_prefix=f"{prefix}/tasks")

    @app.route("/health")
    def health_check():
        return (
            jsonify({"status": "OK", "message": "Kanban API Server is running"}),
            HTTPStatus.OK,
        )

    return app


app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 3001))
    logger.info(f"Starting Flask on port {port}")
    logger.info(f"Health check available at http://localhost:{port}/health")
    try:
        app.run(debug=True, host="0.0.0.0", port=port)
    except Exception as e:
        logger.error(f"Failed to start server: {str(e)}")
        raise
