"""Grouped/search listing of a user's tasks"""

from datetime import timedelta

from taskboard.tasks.models import Task, TaskStatus, utcnow
from taskboard.tasks.service import group_by_status, matches_search


def _add(task_store, task_id, status, updated, user_id="u1", title="Task", description="", created=None):
    task = Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        user_id=user_id,
        created_at=created or updated,
        updated_at=updated,
    )
    task_store.insert(task)
    return task


def _ids(tasks):
    return [t.id for t in tasks]


def test_groups_and_orders_by_updated_desc(task_store, task_service):
    now = utcnow()
    _add(task_store, "1", TaskStatus.CREATED, now - timedelta(days=1), created=now - timedelta(days=3))
    _add(task_store, "2", TaskStatus.INPROGRESS, now, created=now - timedelta(days=2))
    _add(task_store, "3", TaskStatus.COMPLETED, now - timedelta(days=2), created=now - timedelta(days=1))
    _add(task_store, "4", TaskStatus.CREATED, now - timedelta(days=3), created=now)

    grouped = task_service.tasks_by_status("u1")

    assert _ids(grouped.created) == ["1", "4"]
    assert _ids(grouped.inprogress) == ["2"]
    assert _ids(grouped.completed) == ["3"]


def test_only_owner_tasks_are_returned(task_store, task_service):
    now = utcnow()
    _add(task_store, "mine", TaskStatus.CREATED, now, title="shared word")
    _add(task_store, "theirs", TaskStatus.CREATED, now, user_id="u2", title="shared word")

    for term in (None, "", "shared", "word"):
        grouped = task_service.tasks_by_status("u1", term)
        all_tasks = grouped.created + grouped.inprogress + grouped.completed
        assert all(t.user_id == "u1" for t in all_tasks)
        assert "theirs" not in _ids(all_tasks)


def test_search_matches_title_or_description_case_insensitive(task_store, task_service):
    now = utcnow()
    _add(task_store, "t1", TaskStatus.CREATED, now, title="Test Task")
    _add(task_store, "t2", TaskStatus.INPROGRESS, now, title="Other", description="This is a TEST description")
    _add(task_store, "t3", TaskStatus.COMPLETED, now, title="Groceries", description="milk")

    grouped = task_service.tasks_by_status("u1", "test")

    assert _ids(grouped.created) == ["t1"]
    assert _ids(grouped.inprogress) == ["t2"]
    assert grouped.completed == []


def test_search_is_substring_not_pattern(task_store, task_service):
    now = utcnow()
    _add(task_store, "t1", TaskStatus.CREATED, now, title="fix a.b")
    _add(task_store, "t2", TaskStatus.CREATED, now, title="fix axb")

    grouped = task_service.tasks_by_status("u1", "a.b")

    assert _ids(grouped.created) == ["t1"]


def test_surrounding_spaces_are_part_of_the_term(task_store, task_service):
    now = utcnow()
    _add(task_store, "debug", TaskStatus.CREATED, now, title="debug logging")
    _add(task_store, "space", TaskStatus.CREATED, now, title="fix bug")
    _add(task_store, "plain", TaskStatus.CREATED, now, title="groceries")

    assert _ids(task_service.tasks_by_status("u1", " bug").created) == ["space"]
    assert sorted(_ids(task_service.tasks_by_status("u1", " ").created)) == ["debug", "space"]


def test_empty_search_equals_full_listing(task_store, task_service):
    now = utcnow()
    for i, status in enumerate([TaskStatus.CREATED, TaskStatus.INPROGRESS, TaskStatus.COMPLETED, TaskStatus.CREATED]):
        _add(task_store, f"t{i}", status, now - timedelta(hours=i))

    unfiltered = task_service.tasks_by_status("u1")
    assert task_service.tasks_by_status("u1", "") == unfiltered

    listed = {t.id for t in task_service.get_all_tasks("u1")}
    grouped = {t.id for t in unfiltered.created + unfiltered.inprogress + unfiltered.completed}
    assert grouped == listed


def test_each_task_in_exactly_one_bucket_matching_status():
    now = utcnow()
    tasks = [
        Task(id=str(i), title="x", user_id="u1", status=status, updated_at=now - timedelta(minutes=i))
        for i, status in enumerate(list(TaskStatus) * 3)
    ]

    grouped = group_by_status(tasks)

    seen = []
    for status in TaskStatus:
        bucket = grouped.bucket(status)
        assert all(t.status == status for t in bucket)
        assert all(a.updated_at >= b.updated_at for a, b in zip(bucket, bucket[1:]))
        seen.extend(_ids(bucket))
    assert sorted(seen) == sorted(t.id for t in tasks)


def test_ties_keep_input_order():
    stamp = utcnow()
    tasks = [Task(id=i, title="x", user_id="u1", updated_at=stamp) for i in ("a", "b", "c")]

    assert _ids(group_by_status(tasks).created) == ["a", "b", "c"]


def test_matches_search_handles_empty_description():
    task = Task(title="Write report", description="", user_id="u1")

    assert matches_search(task, "REPORT")
    assert not matches_search(task, "email")
