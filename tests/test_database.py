import asyncio
import json

import pytest

from DOGMARKET.core.database import JsonDocumentStore, empty_document


def test_missing_file_reads_as_empty_collections(tmp_path):
    store = JsonDocumentStore(str(tmp_path / "absent.json"))
    assert asyncio.run(store.read()) == empty_document()


def test_write_then_read_round_trip(tmp_path, seed):
    path = tmp_path / "db.json"
    store = JsonDocumentStore(str(path))
    store.data = seed
    asyncio.run(store.write())

    other = JsonDocumentStore(str(path))
    assert asyncio.run(other.read()) == seed
    assert json.loads(path.read_text(encoding="utf-8"))["vets"][0]["id"] == "vet201"


def test_missing_collections_are_filled_in(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"products": [{"id": "p1"}], "vets": "oops"}), encoding="utf-8")
    data = asyncio.run(JsonDocumentStore(str(path)).read())
    assert data["products"] == [{"id": "p1"}]
    assert data["vets"] == []
    assert data["users"] == data["vendors"] == data["orders"] == []


def test_init_creates_the_file(tmp_path):
    path = tmp_path / "nested" / "db.json"
    asyncio.run(JsonDocumentStore(str(path)).init())
    assert json.loads(path.read_text(encoding="utf-8")) == empty_document()


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        asyncio.run(JsonDocumentStore(str(path)).read())


def test_unknown_collection_rejected(tmp_path):
    with pytest.raises(KeyError):
        JsonDocumentStore(str(tmp_path / "db.json")).collection("pets")
