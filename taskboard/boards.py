from flask import Blueprint, request, jsonify
from http import HTTPStatus
from pydantic import ValidationError
import logging
from taskboard.utils import get_task_store

logger = logging.getLogger(__name__)
boards_bp = Blueprint("boards", __name__, url_prefix="/boards")


@boards_bp.before_request
def log_request():
    logger.info(
        f"Request: {request.method} {request.path} Headers: {request.headers.get('User-Agent')}"
    )


@boards_bp.after_request
def log_response(response):
    logger.info(f"Response: {response.status_code} {request.method} {request.path}")
    return response


@boards_bp.route("/<channel_id>/tasks", methods=["GET"])
def get_tasks(channel_id: str):
    try:
        tasks = get_task_store().list(channel_id)
        return jsonify([task.to_json() for task in tasks]), HTTPStatus.OK

    except Exception as e:
        logger.error(f"Error fetching tasks for channel {channel_id}: {str(e)}")
        return (
            jsonify({"error": "Failed to fetch tasks", "code": "INTERNAL_ERROR"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )


@boards_bp.route("/<channel_id>/tasks", methods=["POST"])
def create_task(channel_id: str):
    try:
        if not request.is_json:
            logger.warning("Invalid content type: expected application/json")
            return (
                jsonify(
                    {
                        "error": "Content-Type must be application/json",
                        "code": "INVALID_CONTENT_TYPE",
                    }
                ),
                HTTPStatus.BAD_REQUEST,
            )

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        task = get_task_store().create(
            channel_id,
            title=data.get("title"),
            description=data.get("description"),
            column=data.get("column"),
        )
        return jsonify(task.to_json()), HTTPStatus.CREATED

    except ValidationError as e:
        logger.warning(f"Invalid task for channel {channel_id}: {str(e)}")
        return (
            jsonify(
                {
                    "error": "Title and column are required",
                    "details": e.errors(include_url=False, include_input=False),
                    "code": "VALIDATION_ERROR",
                }
            ),
            HTTPStatus.BAD_REQUEST,
        )
    except Exception as e:
        logger.error(f"Error creating task in channel {channel_id}: {str(e)}")
        return (
            jsonify({"error": "Failed to create task", "code": "INTERNAL_ERROR"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
