from todoserver.utils.id_generator import is_legal_todo_id, new_todo_id


def test_new_ids_are_legal_and_distinct():
    ids = {new_todo_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(is_legal_todo_id(i) for i in ids)


def test_legal_id_shape():
    assert is_legal_todo_id("58895e2c83e5c5ea6fd2c0d3")
    assert is_legal_todo_id("58895E2C83E5C5EA6FD2C0D3")
    assert not is_legal_todo_id("58895e2c83e5c5ea6fd2c0d")
    assert not is_legal_todo_id("58895e2c83e5c5ea6fd2c0dz")
    assert not is_legal_todo_id("")
    assert not is_legal_todo_id(None)
