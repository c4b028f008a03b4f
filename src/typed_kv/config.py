"""Store configuration.

StoreConfig holds the database location and the few knobs the SQLite
adapter exposes. load_store_config() reads it from the [store] table of a
TOML file:

    [store]
    db_path = "state/kv.db"
    table_name = "kvs"
    timeout = 5.0
    strict_decoding = true
"""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_STORE_SECTION = "store"
_DB_FILE = "kvstore.db"
_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_TABLE_NAME = "kvs"
DEFAULT_TIMEOUT = 5.0


def _default_db_path() -> Path:
    return Path.cwd() / _DB_FILE


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for SQLiteKeyValueStore.

    Attributes:
        db_path: SQLite database file, or ":memory:".
        table_name: Name of the key-value table. Interpolated into SQL, so it
            must be a plain identifier.
        timeout: Seconds SQLite waits on a locked database before failing.
        strict_decoding: Validate stored values in pydantic strict mode.
    """

    db_path: str | Path = field(default_factory=_default_db_path)
    table_name: str = DEFAULT_TABLE_NAME
    timeout: float = DEFAULT_TIMEOUT
    strict_decoding: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.table_name, str) or not _TABLE_NAME_RE.match(self.table_name):
            msg = f"table_name must be a plain SQL identifier, got {self.table_name!r}"
            raise ValueError(msg)
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            msg = f"timeout must be a number, got {self.timeout!r}"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ValueError(msg)


def load_store_config(config_file: str | Path) -> StoreConfig:
    """Load store configuration from a TOML file.

    Args:
        config_file: Path to the TOML file.

    Returns:
        Parsed StoreConfig. A relative db_path is resolved against the
        directory containing config_file.

    Raises:
        FileNotFoundError: If config_file is missing.
        ValueError: On invalid TOML or invalid values.
    """
    config_file = Path(config_file)
    if not config_file.exists():
        msg = f"Store config not found: {config_file}"
        raise FileNotFoundError(msg)

    content = config_file.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {config_file}: {exc}"
        raise ValueError(msg) from exc

    config = _parse_config(data, config_file.parent)
    logger.debug("Loaded store config from %s: %s", config_file, config)
    return config


def _parse_config(data: dict[str, object], base_dir: Path) -> StoreConfig:
    """Parse raw TOML data into a StoreConfig.

    Unknown keys are ignored.
    """
    section = data.get(_STORE_SECTION, {})
    if not isinstance(section, dict):
        msg = f"[{_STORE_SECTION}] section must be a table"
        raise ValueError(msg)

    kwargs: dict[str, object] = {}

    db_path = section.get("db_path")
    if db_path is not None:
        if not isinstance(db_path, str) or not db_path:
            msg = "store.db_path must be a non-empty string"
            raise ValueError(msg)
        if db_path == ":memory:":
            kwargs["db_path"] = db_path
        else:
            path = Path(db_path)
            kwargs["db_path"] = path if path.is_absolute() else (base_dir / path).resolve()

    if "table_name" in section:
        kwargs["table_name"] = section["table_name"]
    if "timeout" in section:
        kwargs["timeout"] = section["timeout"]

    strict = section.get("strict_decoding")
    if strict is not None:
        if not isinstance(strict, bool):
            msg = "store.strict_decoding must be a boolean"
            raise ValueError(msg)
        kwargs["strict_decoding"] = strict

    return StoreConfig(**kwargs)  # type: ignore[arg-type]
