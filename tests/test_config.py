import json
from pathlib import Path

import pytest

from granitedb.config import ConfigError, GraniteConfig, ServerConfig, StorageConfig


def test_defaults_match_documented_values():
    cfg = GraniteConfig()
    assert cfg.server.host == "127.0.0.1"
    assert cfg.server.port == 6380
    assert cfg.storage.page_size == 16 * 1024
    assert cfg.storage.wal_segment_size == 64 * 1024 * 1024
    assert cfg.replication.role == "primary"
    assert cfg.replication.primary_port is None
    assert cfg.sharding.num_shards == 4
    assert cfg.logging.level == "info"


def test_wal_dir_is_under_data_dir():
    storage = StorageConfig()
    assert storage.wal_dir == storage.data_dir / "wal"


def test_to_dict_serialises_paths_as_strings():
    data = GraniteConfig().to_dict()
    assert set(data) == {"server", "storage", "auth", "replication", "sharding", "logging"}
    assert isinstance(data["storage"]["data_dir"], str)
    assert Path(data["auth"]["users_file"]) == GraniteConfig().auth.users_file


def test_dict_round_trip():
    cfg = GraniteConfig(server=ServerConfig(host="0.0.0.0", port=7000))
    cfg.replication.primary_host = "primary.example.com"
    cfg.replication.primary_port = 6381
    assert GraniteConfig.from_dict(cfg.to_dict()) == cfg


def test_missing_file_gives_defaults(tmp_path):
    assert GraniteConfig.load_from_file(tmp_path / "absent.json") == GraniteConfig()


def test_save_and_load_round_trip(tmp_path):
    cfg = GraniteConfig()
    cfg.sharding.enabled = True
    cfg.sharding.shard_key = "user_id"
    path = tmp_path / "nested" / "dir" / "config.json"
    cfg.save_to_file(path)
    assert path.exists()
    assert GraniteConfig.load_from_file(path) == cfg


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        GraniteConfig.load_from_file(path)


def test_missing_field_raises(tmp_path):
    data = GraniteConfig().to_dict()
    del data["server"]["port"]
    path = tmp_path / "partial.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ConfigError):
        GraniteConfig.load_from_file(path)


def test_wrong_type_raises():
    data = GraniteConfig().to_dict()
    data["storage"]["wal_fsync"] = "yes"
    with pytest.raises(ConfigError):
        GraniteConfig.from_dict(data)


def test_port_out_of_range_raises():
    data = GraniteConfig().to_dict()
    data["server"]["port"] = 70000
    with pytest.raises(ConfigError):
        GraniteConfig.from_dict(data)


def test_unknown_fields_are_ignored():
    data = GraniteConfig().to_dict()
    data["server"]["extra"] = 1
    assert GraniteConfig.from_dict(data) == GraniteConfig()