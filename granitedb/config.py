"""Server and engine configuration with JSON persistence."""

import json
import types
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional, Union, get_args, get_origin

_U16 = {"max": 65535}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be parsed."""


@dataclass
class ServerConfig:
    """Network listener settings."""

    host: str = "127.0.0.1"
    port: int = field(default=6380, metadata=_U16)
    max_connections: int = 10_000
    connection_timeout_secs: int = 30
    worker_threads: int = 0


@dataclass
class StorageConfig:
    """Storage engine settings."""

    data_dir: Path = Path("./data/granite")
    wal_dir: Path = Path("./data/granite") / "wal"
    page_size: int = 16 * 1024
    buffer_pool_pages: int = 4096
    wal_fsync: bool = True
    wal_segment_size: int = 64 * 1024 * 1024
    encryption_at_rest: bool = False
    compaction_interval_secs: int = 300


@dataclass
class AuthConfig:
    """Authentication settings."""

    enabled: bool = False
    admin_user: str = "admin"
    users_file: Path = Path("./data/granite/users.json")


@dataclass
class ReplicationConfig:
    """Replication settings."""

    enabled: bool = False
    role: str = "primary"
    primary_host: Optional[str] = None
    primary_port: Optional[int] = field(default=None, metadata=_U16)
    oplog_size_mb: int = 256


@dataclass
class ShardingConfig:
    """Sharding settings."""

    enabled: bool = False
    shard_key: Optional[str] = None
    num_shards: int = 4


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    output: str = "stdout"
    log_file: Path = Path("./data/granite/granitedb.log")
    json_format: bool = False


@dataclass
class GraniteConfig:
    """Master configuration for the server."""

    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    replication: ReplicationConfig = field(default_factory=ReplicationConfig)
    sharding: ShardingConfig = field(default_factory=ShardingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dictionary of the configuration."""
        return _to_json(self)

    @classmethod
    def from_dict(cls, data: Any) -> "GraniteConfig":
        """Build a configuration from a dictionary; every field is required."""
        return _build(cls, data, "config")

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> "GraniteConfig":
        """Load from a JSON file, or return defaults if the file does not exist."""
        path = Path(path)
        if not path.exists():
            return cls()
        content = path.read_text(encoding="utf-8")
        try:
            return cls.from_dict(json.loads(content))
        except (json.JSONDecodeError, ConfigError) as exc:
            raise ConfigError(f"Failed to parse config: {exc}") from exc

    def save_to_file(self, path: Union[str, Path]) -> None:
        """Write the configuration as pretty-printed JSON, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")


def _to_json(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Path):
        return str(value)
    return value


def _build(cls: type, data: Any, where: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected an object")
    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            raise ConfigError(f"{where}: missing field '{f.name}'")
        kwargs[f.name] = _convert(f.type, data[f.name], f"{where}.{f.name}", f.metadata)
    return cls(**kwargs)


def _convert(tp: Any, value: Any, where: str, metadata: Any) -> Any:
    if get_origin(tp) in (Union, types.UnionType):
        if value is None:
            return None
        tp = next(arg for arg in get_args(tp) if arg is not type(None))
    if is_dataclass(tp):
        return _build(tp, value, where)
    if tp is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"{where}: expected a boolean")
        return value
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{where}: expected an integer")
        limit = metadata.get("max")
        if value < 0 or (limit is not None and value > limit):
            raise ConfigError(f"{where}: integer {value} out of range")
        return value
    if tp is str:
        if not isinstance(value, str):
            raise ConfigError(f"{where}: expected a string")
        return value
    if tp is Path:
        if not isinstance(value, str):
            raise ConfigError(f"{where}: expected a path string")
        return Path(value)
    raise ConfigError(f"{where}: unsupported type")