from datetime import timezone

import pytest

from webgen.api.serializers import serialize_stored
from webgen.db.store import BundleStore
from webgen.ir.bundle import CodeBundle
from webgen.ir.errors import PersistenceError


def make_store():
    return BundleStore.from_url("sqlite://")


def test_insert_and_get():
    store = make_store()
    bundle = CodeBundle("<App />", "server()", "")

    record = store.insert("a shop", bundle)

    assert record.id
    assert record.created_at is not None

    loaded = store.get(record.id)
    assert loaded.id == record.id
    assert loaded.prompt == "a shop"
    assert loaded.bundle == bundle


def test_get_unknown_id():
    assert make_store().get("does-not-exist") is None


def test_list_newest_first_with_limit():
    store = make_store()
    ids = [store.insert(f"app {i}", CodeBundle(str(i), "", "")).id for i in range(3)]

    listed = store.list()
    assert [r.id for r in listed] == list(reversed(ids))

    assert len(store.list(limit=2)) == 2


def test_created_at_keeps_utc_offset_after_reload():
    store = make_store()
    record = store.insert("a blog", CodeBundle("f", "b", "d"))

    loaded = store.get(record.id)
    listed = store.list()[0]

    assert record.created_at.tzinfo is not None
    assert loaded.created_at == record.created_at
    assert listed.created_at == record.created_at
    assert loaded.created_at.utcoffset() == timezone.utc.utcoffset(None)
    assert loaded.created_at.isoformat() == record.created_at.isoformat()


def test_unencodable_text_raises_persistence_error():
    store = make_store()

    with pytest.raises(PersistenceError):
        store.insert("x", CodeBundle("\ud800", "", ""))

    # the failed write leaves the store usable and empty
    assert store.list() == []
    assert store.insert("y", CodeBundle("f", "", "")).prompt == "y"


def test_serialize_stored():
    record = make_store().insert("x", CodeBundle("f", "b", "d"))
    data = serialize_stored(record)

    assert data["bundle"] == {"frontend": "f", "backend": "b", "database": "d"}
    assert data["prompt"] == "x"
    assert data["created_at"] == record.created_at.isoformat()
    assert data["created_at"].endswith("+00:00")
