from flask import Blueprint, request, jsonify
from http import HTTPStatus
import logging
from taskboard.utils import get_task_store

logger = logging.getLogger(__name__)
tasks_bp = Blueprint("tasks", __name__, url_prefix="/tasks")


def task_not_found(task_id: str):
    logger.warning(f"Task not found: {task_id}")
    return (
        jsonify({"error": "Task not found", "code": "NOT_FOUND"}),
        HTTPStatus.NOT_FOUND,
    )


@tasks_bp.before_request
def log_request():
    logger.info(
        f"Request: {request.method} {request.path} Headers: {request.headers.get('User-Agent')}"
    )


@tasks_bp.after_request
def log_response(response):
    logger.info(f"Response: {response.status_code} {request.method} {request.path}")
    return response


@tasks_bp.route("/<task_id>", methods=["GET"])
def get_task(task_id: str):
    try:
        task = get_task_store().get_by_id(task_id)
        if not task:
            return task_not_found(task_id)

        return jsonify(task.to_json()), HTTPStatus.OK

    except Exception as e:
        logger.error(f"Error fetching task {task_id}: {str(e)}")
        return (
            jsonify({"error": "Failed to fetch task", "code": "INTERNAL_ERROR"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )


@tasks_bp.route("/<task_id>", methods=["PATCH"])
def update_task(task_id: str):
    try:
        updates = request.get_json(force=True, silent=True)
        if updates is None:
            updates = {}
        if not isinstance(updates, dict):
            logger.warning(f"Invalid update body for task {task_id}")
            return (
                jsonify(
                    {
                        "error": "Request body must be a JSON object",
                        "code": "INVALID_BODY",
                    }
                ),
                HTTPStatus.BAD_REQUEST,
            )

        task = get_task_store().update(task_id, updates)
        if not task:
            return task_not_found(task_id)

        return jsonify(task.to_json()), HTTPStatus.OK

    except Exception as e:
        logger.error(f"Error updating task {task_id}: {str(e)}")
        return (
            jsonify({"error": "Failed to update task", "code": "INTERNAL_ERROR"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )


@tasks_bp.route("/<task_id>", methods=["DELETE"])
def delete_task(task_id: str):
    try:
        task = get_task_store().delete(task_id)
        if not task:
            return task_not_found(task_id)

        return (
            jsonify({"message": "Task deleted successfully", "task": task.to_json()}),
            HTTPStatus.OK,
        )

    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {str(e)}")
        return (
            jsonify({"error": "Failed to delete task", "code": "INTERNAL_ERROR"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
