import pytest

from granitedb.cursor import Cursor


def docs(n):
    return [{"n": i} for i in range(n)]


def test_batches_cover_all_documents_in_order():
    cur = Cursor(docs(5), 2)
    batches = []
    while cur.has_next():
        batches.append(cur.next_batch())
    assert [len(b) for b in batches] == [2, 2, 1]
    assert [d for b in batches for d in b] == docs(5)


def test_exhausted_cursor_returns_empty_batch():
    cur = Cursor(docs(2), 5)
    assert cur.next_batch() == docs(2)
    assert not cur.has_next()
    assert cur.next_batch() == []


def test_total_and_remaining():
    cur = Cursor(docs(7), 3)
    assert cur.total() == 7
    assert cur.remaining() == 7
    cur.next_batch()
    assert cur.remaining() == 4
    assert cur.total() == 7


def test_rewind_restarts():
    cur = Cursor(docs(3), 2)
    first = cur.next_batch()
    cur.collect_all()
    cur.rewind()
    assert cur.has_next()
    assert cur.remaining() == 3
    assert cur.next_batch() == first


def test_collect_all_returns_rest_and_exhausts():
    cur = Cursor(docs(6), 2)
    cur.next_batch()
    assert cur.collect_all() == docs(6)[2:]
    assert not cur.has_next()
    assert cur.remaining() == 0
    assert cur.collect_all() == []


def test_empty_cursor_exhausts_on_first_batch():
    cur = Cursor([], 4)
    assert cur.has_next()
    assert cur.next_batch() == []
    assert not cur.has_next()


def test_ids_are_unique():
    assert Cursor([], 1).id != Cursor([], 1).id
    assert len(Cursor([], 1).id) == len("00000000-0000-0000-0000-000000000000")


def test_negative_batch_size_rejected():
    with pytest.raises(ValueError):
        Cursor(docs(1), -1)