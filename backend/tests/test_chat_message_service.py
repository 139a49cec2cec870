import pytest

from hello_ai.core.constants import RETENTION_MS
from hello_ai.core.errors import SqlExecutionError
from hello_ai.db.executor import SqlResult
from hello_ai.services.chat_message_service import (
    append_message,
    clear_session,
    list_messages,
    sweep_expired,
)

NOW = 1_750_000_000_000


def test_list_is_ordered_by_created_at(executor):
    append_message(executor, "m3", "s1", "assistant", "third", 3000)
    append_message(executor, "m1", "s1", "user", "first", 1000)
    append_message(executor, "m2", "s1", "user", "second", 2000)

    messages = list_messages(executor, "s1")

    assert [m.id for m in messages] == ["m1", "m2", "m3"]
    ts = [m.created_at for m in messages]
    assert ts == sorted(ts)


def test_append_then_list_includes_message_exactly_once(executor):
    append_message(executor, "only", "s1", "user", "hello", 1000)

    messages = list_messages(executor, "s1")

    assert [m.id for m in messages].count("only") == 1
    m = messages[0]
    assert (m.session_id, m.role, m.content, m.created_at) == ("s1", "user", "hello", 1000)


def test_sessions_are_isolated(executor):
    append_message(executor, "a", "s1", "user", "mine", 1000)
    append_message(executor, "b", "s2", "user", "theirs", 1000)

    assert [m.id for m in list_messages(executor, "s1")] == ["a"]
    assert [m.id for m in list_messages(executor, "s2")] == ["b"]


def test_clear_session_only_touches_that_session(executor):
    append_message(executor, "a", "s1", "user", "x", 1000)
    append_message(executor, "b", "s1", "assistant", "y", 1001)
    append_message(executor, "c", "s2", "user", "z", 1000)

    assert clear_session(executor, "s1") == 2
    assert list_messages(executor, "s1") == []
    assert len(list_messages(executor, "s2")) == 1


def test_to_display_shape(executor):
    append_message(executor, "m1", "s1", "assistant", "hi there", 1234)

    assert list_messages(executor, "s1")[0].to_display() == {
        "id": "m1",
        "role": "assistant",
        "text": "hi there",
        "ts": 1234,
        "kind": "normal",
    }


def test_sweep_deletes_only_strictly_older_than_horizon(executor):
    cutoff = NOW - RETENTION_MS
    append_message(executor, "old", "s1", "user", "old", cutoff - 1)
    append_message(executor, "edge", "s1", "user", "edge", cutoff)
    append_message(executor, "young", "s1", "user", "young", cutoff + 1)
    append_message(executor, "other-old", "s2", "user", "old", cutoff - 1)

    assert sweep_expired(executor, now_ms=NOW) == 2

    assert [m.id for m in list_messages(executor, "s1")] == ["edge", "young"]
    assert list_messages(executor, "s2") == []


def test_sweep_is_idempotent(executor):
    append_message(executor, "old", "s1", "user", "old", NOW - RETENTION_MS - 5)

    assert sweep_expired(executor, now_ms=NOW) == 1
    assert sweep_expired(executor, now_ms=NOW) == 0


def test_append_failure_is_raised(executor):
    append_message(executor, "dup", "s1", "user", "x", 1000)

    with pytest.raises(SqlExecutionError, match="Failed to insert chat message"):
        append_message(executor, "dup", "s1", "user", "again", 1001)


class _FailingExecutor:
    name = "failing"

    def execute(self, sql, params=None) -> SqlResult:
        raise SqlExecutionError("HTTP 400: bad request")


def test_append_failure_from_remote_backend_is_raised():
    with pytest.raises(SqlExecutionError, match="HTTP 400"):
        append_message(_FailingExecutor(), "m1", "s1", "user", "x", 1000)
