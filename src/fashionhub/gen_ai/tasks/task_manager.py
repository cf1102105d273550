#
# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
In-memory status store for background generation batches (lookbooks, pose sets).
"""
import datetime
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

TASK_RECEIVED = "received"
TASK_PROCESSING = "processing"
TASK_COMPLETED = "completed"
TASK_FAILED = "failed"

# task_id -> task record; lost on restart.
task_status: Dict[str, Dict[str, Any]] = {}


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def init_task(task_id: str, task_type: str, input_details: Optional[Dict[str, Any]] = None):
    """
    Register a new batch.

    Args:
        task_id: Unique identifier for the task.
        task_type: Kind of batch, e.g. "lookbook" or "poses".
        input_details: Small summary of the request (counts, gender, ...). Never raw images.
    """
    if task_id in task_status:
        logger.warning(f"Task ID {task_id} already exists. Re-initializing.")

    created = _now()
    task_status[task_id] = {
        "task_id": task_id,
        "task_type": task_type,
        "status": TASK_RECEIVED,
        "input_details": input_details or {},
        "progress": {"current": 0, "total": 0},
        "result": None,
        "error": None,
        "created_at": created,
        "updated_at": created,
        "logs": [],
    }
    add_task_log(task_id, f"Task initialized. Type: {task_type}")
    logger.info(f"Task {task_id} initialized of type {task_type}.")


def update_task_status(
    task_id: str,
    status: str,
    result: Optional[Any] = None,
    error: Optional[str] = None,
):
    """
    Move a task to a new status.

    Args:
        task_id: The ID of the task to update.
        status: One of received, processing, completed, failed.
        result: Optional result payload of a completed batch.
        error: Optional error message of a failed batch.
    """
    task = task_status.get(task_id)
    if task is None:
        logger.error(f"Attempted to update non-existent task ID: {task_id}")
        return

    task["status"] = status
    task["updated_at"] = _now()

    if result is not None:
        task["result"] = result

    if error:
        task["error"] = error
        add_task_log(task_id, f"ERROR: {error}")
    elif status != TASK_FAILED and task["error"] is not None:
        task["error"] = None
        add_task_log(task_id, "Previous error condition cleared.")

    add_task_log(task_id, f"Status changed to: {status}.")
    logger.info(f"Task {task_id} status updated to {status}.")


def update_task_progress(task_id: str, current: int, total: int):
    """Record batch progress; used as the on_progress callback of the services."""
    task = task_status.get(task_id)
    if task is None:
        logger.warning(f"Progress for unknown task ID: {task_id}")
        return
    task["progress"] = {"current": current, "total": total}
    task["updated_at"] = _now()
    add_task_log(task_id, f"Progress {current}/{total}")


def add_task_log(task_id: str, message: str):
    task = task_status.get(task_id)
    if task is None:
        logger.warning(f"Attempted to add log to non-existent task ID: {task_id}. Log: '{message}'")
        return
    task["logs"].append({"timestamp": _now(), "message": message})


def get_task_status(task_id: str) -> Optional[Dict[str, Any]]:
    """
    Get the status and details of a task.

    Returns:
        A copy of the task record, or None if the task_id is unknown.
    """
    task = task_status.get(task_id)
    if task is None:
        logger.warning(f"Task ID {task_id} not found in task_status store.")
        return None
    return task.copy()


def get_all_tasks_summary(status: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Summaries of all tasks, newest first, optionally filtered by status."""
    summaries = [
        {
            "task_id": task_id,
            "task_type": details.get("task_type"),
            "status": details.get("status"),
            "progress": details.get("progress"),
            "created_at": details.get("created_at"),
            "updated_at": details.get("updated_at"),
            "error": details.get("error"),
        }
        for task_id, details in task_status.items()
        if status is None or details.get("status") == status
    ]
    summaries.sort(key=lambda item: item["created_at"], reverse=True)
    if limit is not None:
        summaries = summaries[:limit]
    logger.info(f"Retrieved summary for {len(summaries)} tasks.")
    return summaries
