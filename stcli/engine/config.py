"""Persisted session settings and the JSON config file that holds them.

The config file is the only state stcli keeps between runs. It is loaded
once at startup, written on exit and on ``save_config``, and rotated (moved
aside with a UTC timestamp suffix) by ``new_config``.

Rotation is rename-then-write: the old file is renamed first and a fresh
default is only written once the rename succeeded. A crash between the two
steps leaves no file at the original path; the backup still holds the data.
"""

from __future__ import annotations

import dataclasses
import datetime
import pathlib
from dataclasses import dataclass

import orjson
import whenever
from loguru import logger

from stcli.engine.primitives import (
    BACKUP_TIMESTAMP_FORMAT,
    DEFAULT_BASE_PATH,
    DEFAULT_TIMEOUT_SECS,
)


class ConfigError(Exception):
    """Base class for config file problems."""


class ConfigNotFound(ConfigError):
    """The config file does not exist (the caller decides whether to create one)."""


class ConfigParseError(ConfigError):
    """The config file exists but its content is not a valid GameConfig."""


@dataclass(slots=True)
class GameConfig:
    # General Settings
    request_timeout_secs: int = DEFAULT_TIMEOUT_SECS

    # Game Settings
    base_path: str = DEFAULT_BASE_PATH
    access_token: str = ""
    call_sign: str = ""
    faction: str = ""

    # State
    headquarters: str = ""

    def to_json(self) -> bytes:
        return orjson.dumps(
            dataclasses.asdict(self),
            option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE,
        )

    @classmethod
    def from_json(cls, content: bytes | str) -> GameConfig:
        try:
            found = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise ConfigParseError(f"not valid JSON: {e}") from e

        if not isinstance(found, dict):
            raise ConfigParseError(
                f"expected a JSON object, got {type(found).__name__}"
            )

        values = {}
        for f in dataclasses.fields(cls):
            if f.name not in found:
                raise ConfigParseError(f"missing field '{f.name}'")

            val = found[f.name]

            # bool is an int subclass but never a valid timeout
            wanted = int if f.type in {"int", int} else str
            if not isinstance(val, wanted) or isinstance(val, bool):
                raise ConfigParseError(
                    f"field '{f.name}' must be {wanted.__name__}, got {type(val).__name__}"
                )

            values[f.name] = val

        if extra := sorted(set(found) - set(values)):
            logger.warning("Ignoring unknown config fields: {}", ", ".join(extra))

        return cls(**values)


def load(path: pathlib.Path | str) -> GameConfig:
    path = pathlib.Path(path)
    try:
        content = path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigNotFound(f"{path} does not exist") from e

    try:
        return GameConfig.from_json(content)
    except ConfigParseError as e:
        raise ConfigParseError(f"{path}: {e}") from e


def save(config: GameConfig, path: pathlib.Path | str) -> None:
    """Serialize and overwrite ``path``. I/O errors propagate to the caller."""
    path = pathlib.Path(path)
    logger.info("Saving config to {}", path)
    path.write_bytes(config.to_json())


def create_default_and_persist(path: pathlib.Path | str) -> GameConfig:
    config = GameConfig()
    save(config, path)
    return config


def backup_name(path: pathlib.Path | str, now: datetime.datetime) -> pathlib.Path:
    path = pathlib.Path(path)
    stamp = now.astimezone(datetime.timezone.utc).strftime(BACKUP_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.name}.{stamp}")


def rotate(
    path: pathlib.Path | str, now: datetime.datetime | None = None
) -> pathlib.Path:
    """Move ``path`` aside as a timestamped backup and write fresh defaults.

    Returns the backup path. If the rename fails nothing new is written.
    """
    path = pathlib.Path(path)
    if now is None:
        now = whenever.ZonedDateTime.now("UTC").to_stdlib()

    backup = backup_name(path, now)

    # rename() silently replaces an existing target on POSIX
    if backup.exists():
        raise FileExistsError(f"Backup {backup} already exists, refusing to replace it")

    path.rename(backup)
    logger.info("Moved {} to {}", path, backup)

    create_default_and_persist(path)
    return backup
