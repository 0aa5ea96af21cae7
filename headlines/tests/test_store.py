import json

import pytest

from headlines.errors import StoreError
from headlines.storage.store import JsonFileStore, MemoryStore


@pytest.fixture(params=["memory", "json"])
def kv(request, clock, tmp_path):
    if request.param == "memory":
        return MemoryStore(time_fn=clock.time)
    return JsonFileStore(str(tmp_path / "store.json"), time_fn=clock.time)


def test_get_put_default(kv):
    assert kv.get("missing") is None
    assert kv.get("missing", []) == []
    kv.put("k", ["a", "b"])
    assert kv.get("k") == ["a", "b"]
    assert kv.has("k")


def test_ttl_expiry(kv, clock):
    kv.put("short", "v", ttl=3600)
    kv.put("forever", "v")
    clock.advance(3599)
    assert kv.get("short") == "v"
    clock.advance(1)
    assert kv.get("short") is None
    clock.advance(10 * 86400)
    assert kv.get("forever") == "v"


def test_forget(kv):
    kv.put("k", 1)
    assert kv.forget("k") is True
    assert kv.get("k") is None
    assert kv.forget("k") is False


def test_increment_starts_at_zero_and_resets_after_ttl(kv, clock):
    assert kv.increment("counter", ttl=86400) == 1
    assert kv.increment("counter", ttl=86400) == 2
    assert kv.get("counter") == 2
    clock.advance(86400)
    assert kv.get("counter", 0) == 0
    assert kv.increment("counter", ttl=86400) == 1


def test_json_store_persists_between_instances(tmp_path, clock):
    path = str(tmp_path / "data" / "store.json")
    JsonFileStore(path, time_fn=clock.time).put("breaking_news", ["a"], ttl=60)
    other = JsonFileStore(path, time_fn=clock.time)
    assert other.get("breaking_news") == ["a"]
    raw = json.loads((tmp_path / "data" / "store.json").read_text(encoding="utf-8"))
    assert raw["breaking_news"]["expires"] == clock.now + 60


def test_json_store_recovers_from_corrupt_file(tmp_path, clock, caplog):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    kv = JsonFileStore(str(path), time_fn=clock.time)
    assert kv.get("k") is None
    kv.put("k", "v")
    assert kv.get("k") == "v"
    assert "corrompido" in caplog.text


def test_json_store_write_failure_raises_store_error(tmp_path, clock):
    # o caminho aponta para um diretório: escrita falha com OSError
    target = tmp_path / "as_dir"
    target.mkdir()
    kv = JsonFileStore(str(target), time_fn=clock.time)
    with pytest.raises(StoreError):
        kv.put("k", "v")


def test_json_store_failed_write_keeps_previous_file(tmp_path, clock):
    path = tmp_path / "store.json"
    kv = JsonFileStore(str(path), time_fn=clock.time)
    kv.put("breaking_news_manual", ["Keep me"])
    kv.increment("news_api_requests_2025-10-09", ttl=86400)

    # valor não serializável: a escrita falha no meio do json.dump
    with pytest.raises(StoreError):
        kv.put("broken", object())

    assert kv.get("breaking_news_manual") == ["Keep me"]
    assert kv.get("news_api_requests_2025-10-09") == 1
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_json_store_leaves_no_temp_files(tmp_path, clock):
    kv = JsonFileStore(str(tmp_path / "store.json"), time_fn=clock.time)
    for i in range(5):
        kv.put(f"k{i}", i)
    kv.forget("k0")
    kv.increment("counter")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["store.json"]
    assert json.loads((tmp_path / "store.json").read_text(encoding="utf-8"))["counter"]["value"] == 1
