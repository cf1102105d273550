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


import pytest

from fashionhub.gen_ai.tasks import task_manager


@pytest.fixture(autouse=True)
def clean_store():
    task_manager.task_status.clear()
    yield
    task_manager.task_status.clear()


def test_init_task_creates_received_record():
    task_manager.init_task("t1", "lookbook", {"gender": "w"})
    task = task_manager.get_task_status("t1")

    assert task["status"] == task_manager.TASK_RECEIVED
    assert task["input_details"] == {"gender": "w"}
    assert task["result"] is None
    assert task["progress"] == {"current": 0, "total": 0}
    assert task["logs"][0]["message"].startswith("Task initialized")


def test_status_transitions_and_result():
    task_manager.init_task("t1", "poses")
    task_manager.update_task_status("t1", task_manager.TASK_PROCESSING)
    task_manager.update_task_progress("t1", 2, 5)
    task_manager.update_task_status("t1", task_manager.TASK_COMPLETED, result={"results": []})

    task = task_manager.get_task_status("t1")
    assert task["status"] == task_manager.TASK_COMPLETED
    assert task["result"] == {"results": []}
    assert task["progress"] == {"current": 2, "total": 5}
    assert [log["message"] for log in task["logs"]][-1] == "Status changed to: completed."


def test_error_is_cleared_when_task_recovers():
    task_manager.init_task("t1", "poses")
    task_manager.update_task_status("t1", task_manager.TASK_FAILED, error="quota")
    assert task_manager.get_task_status("t1")["error"] == "quota"

    task_manager.update_task_status("t1", task_manager.TASK_PROCESSING)
    assert task_manager.get_task_status("t1")["error"] is None


def test_unknown_task_is_ignored():
    task_manager.update_task_status("missing", task_manager.TASK_COMPLETED)
    task_manager.add_task_log("missing", "hello")
    assert task_manager.get_task_status("missing") is None


def test_summary_filters_and_limits():
    task_manager.init_task("a", "lookbook")
    task_manager.init_task("b", "poses")
    task_manager.init_task("c", "poses")
    task_manager.update_task_status("b", task_manager.TASK_FAILED, error="boom")

    failed = task_manager.get_all_tasks_summary(status=task_manager.TASK_FAILED)
    assert [s["task_id"] for s in failed] == ["b"]
    assert failed[0]["error"] == "boom"
    assert len(task_manager.get_all_tasks_summary(limit=2)) == 2
    assert "logs" not in task_manager.get_all_tasks_summary()[0]
