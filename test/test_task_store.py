from datetime import datetime, timedelta

from quicktask.models import ParsedTask, TaskUpdate
from storage.task_store import TaskStore


def test_create_and_reload(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    task = store.create(ParsedTask(name="Write report", priority="P2"), now)

    assert task.id
    assert task.completed is False
    assert task.created_at == task.updated_at == now

    loaded = TaskStore(path=str(tmp_path / "tasks.json")).load()
    assert [t.id for t in loaded] == [task.id]
    assert loaded[0].priority == "P2"


def test_newest_first(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    first = store.create(ParsedTask(name="first"), now)
    second = store.create(ParsedTask(name="second"), now + timedelta(minutes=1))
    assert [t.id for t in store.load()] == [second.id, first.id]


def test_update_refreshes_updated_at(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    task = store.create(ParsedTask(name="draft", assignee="Aman"), now)
    later = now + timedelta(hours=1)

    updated = store.update(task.id, TaskUpdate(name="final", assignee=None), later)
    assert updated.name == "final"
    assert updated.assignee is None
    assert updated.priority == "P3"
    assert updated.updated_at == later
    assert updated.created_at == now


def test_update_ignores_blank_name(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    task = store.create(ParsedTask(name="keep me"), now)
    assert store.update(task.id, TaskUpdate(name="   "), now).name == "keep me"


def test_toggle_complete(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    task = store.create(ParsedTask(name="toggle"), now)
    assert store.toggle_complete(task.id, now).completed is True
    assert store.toggle_complete(task.id, now).completed is False


def test_missing_ids(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    assert store.get("nope") is None
    assert store.update("nope", TaskUpdate(name="x"), now) is None
    assert store.toggle_complete("nope", now) is None
    assert store.delete("nope") is False


def test_delete_and_clear(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    a = store.create(ParsedTask(name="a"), now)
    store.create(ParsedTask(name="b"), now)
    assert store.delete(a.id) is True
    assert len(store.load()) == 1
    store.clear()
    assert store.load() == []


def test_corrupted_file(tmp_path):
    p = tmp_path / "tasks.json"
    p.write_text("{not valid json")
    store = TaskStore(path=str(p))
    assert store.load() == []


def test_due_date_survives_round_trip(tmp_path, now):
    store = TaskStore(path=str(tmp_path / "tasks.json"))
    due = datetime(2024, 6, 20, 23, 59, 59)
    task = store.create(ParsedTask(name="due", due_date=due), now)
    assert store.get(task.id).due_date == due


def test_path_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("QUICKTASK_DATA_PATH", str(tmp_path / "env.json"))
    assert TaskStore().path == tmp_path / "env.json"


def test_write_after_corrupt_file_keeps_old_contents(tmp_path, now):
    p = tmp_path / "tasks.json"
    store = TaskStore(path=str(p))
    store.create(ParsedTask(name="a"), now)
    store.create(ParsedTask(name="b"), now)
    broken = p.read_text()[:-5]
    p.write_text(broken)

    store.create(ParsedTask(name="c"), now)

    assert [t.name for t in store.load()] == ["c"]
    backup = tmp_path / "tasks.json.bak"
    assert backup.read_text() == broken
    assert '"a"' in broken and '"b"' in broken


def test_reads_leave_corrupt_file_in_place(tmp_path):
    p = tmp_path / "tasks.json"
    p.write_text("{not valid json")
    store = TaskStore(path=str(p))
    assert store.get("nope") is None
    assert p.read_text() == "{not valid json"
    assert not (tmp_path / "tasks.json.bak").exists()
