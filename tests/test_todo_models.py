"""Tests for Todo identity semantics."""

from todoserver.todos.todo_models import Todo

FAKE_ID_1 = "aaaaaaaaaaaaaaaaaaaaaaaa"
FAKE_ID_2 = "bbbbbbbbbbbbbbbbbbbbbbbb"


def _todo(todo_id, owner="Chris"):
    return Todo(id=todo_id, owner=owner, status=False, body="UMM homework", category="homework")


def test_todos_with_equal_id_are_equal():
    assert _todo(FAKE_ID_1) == _todo(FAKE_ID_1, owner="Pat")


def test_todos_with_different_id_are_not_equal():
    assert _todo(FAKE_ID_1) != _todo(FAKE_ID_2)


def test_hash_is_based_on_id():
    assert hash(_todo(FAKE_ID_1)) == hash(_todo(FAKE_ID_1, owner="Sam"))
    assert len({_todo(FAKE_ID_1), _todo(FAKE_ID_1, owner="Sam")}) == 1


def test_todo_not_equal_to_its_id():
    assert _todo(FAKE_ID_1) != FAKE_ID_1
