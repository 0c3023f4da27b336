"""TOML configuration for the quiz trainer.

Defaults live in ``_DEFAULTS``; a user file may override any known key and
is rejected when it introduces unknown ones. The merged mapping is then
validated into frozen dataclasses so the rest of the package never touches
raw TOML values.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

try:  # Python >= 3.11 ships ``tomllib`` in the stdlib.
    import tomllib
except ModuleNotFoundError as exc:  # pragma: no cover - defensive guard
    raise RuntimeError("Python 3.11+ is required for tomllib.") from exc

__all__ = [
    "CONFIG_FILENAME",
    "CONFIG_PATH_ENV",
    "ConfigError",
    "CreditsConfig",
    "LoggingConfig",
    "ShellConfig",
    "StorageConfig",
    "TrainerConfig",
    "load_config",
    "load_toml",
    "merge_defaults",
    "resolve_config_path",
]

CONFIG_PATH_ENV = "QUIZ_TRAINER_CONFIG"
CONFIG_FILENAME = "quiz-trainer.toml"

_DEFAULTS: dict[str, Any] = {
    "storage": {
        "path": "",
        "seed_defaults": True,
    },
    "shell": {
        "prompt": "quiz > ",
        "prompt_style": "blue",
        "question_style": "red",
    },
    "logging": {
        "level": "INFO",
        "verbose": False,
    },
    "credits": {
        "authors": ["Quiz Trainer contributors"],
    },
}

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(RuntimeError):
    """Raised when config IO or validation fails."""


@dataclass(frozen=True)
class StorageConfig:
    path: Optional[Path]
    seed_defaults: bool


@dataclass(frozen=True)
class ShellConfig:
    prompt: str
    prompt_style: str
    question_style: str


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    verbose: bool


@dataclass(frozen=True)
class CreditsConfig:
    authors: tuple[str, ...]


@dataclass(frozen=True)
class TrainerConfig:
    storage: StorageConfig
    shell: ShellConfig
    logging: LoggingConfig
    credits: CreditsConfig
    source: Optional[Path] = None

    def storage_path(self, data_dir: Path) -> Path:
        """Return the JSON Lines store, defaulting inside ``data_dir``."""

        if self.storage.path is not None:
            return self.storage.path
        return data_dir / "quizzes.jsonl"


def load_toml(path: Path) -> Mapping[str, Any]:
    """Load a TOML document, surfacing failures as :class:`ConfigError`."""

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config TOML: {exc}") from exc


def merge_defaults(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    """Recursively merge ``override`` into ``base`` enforcing known keys."""

    for key, value in override.items():
        dotted = f"{path}{key}"
        if key not in base:
            raise ConfigError(f"Unknown configuration key '{dotted}'.")
        base_value = base[key]
        if isinstance(base_value, MutableMapping):
            if not isinstance(value, Mapping):
                raise ConfigError(
                    "Expected table for '{0}', found {1}.".format(
                        dotted,
                        type(value).__name__,
                    )
                )
            merge_defaults(base_value, value, path=f"{dotted}.")
            continue
        base[key] = value


def resolve_config_path(
    explicit: Optional[Path],
    *,
    config_dir: Path,
    env: Mapping[str, str] | None = None,
) -> Optional[Path]:
    """Pick the config file: explicit path, env override, then workspace."""

    if explicit is not None:
        return Path(explicit).expanduser()
    env_map = os.environ if env is None else env
    custom = (env_map.get(CONFIG_PATH_ENV) or "").strip()
    if custom:
        return Path(custom).expanduser()
    candidate = config_dir / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(path: Optional[Path] = None) -> TrainerConfig:
    """Return validated settings; defaults only when ``path`` is None."""

    data = copy.deepcopy(_DEFAULTS)
    if path is not None:
        merge_defaults(data, load_toml(path))
    return _build_config(data, source=path)


def _build_config(
    data: Mapping[str, Any], *, source: Optional[Path]
) -> TrainerConfig:
    storage = data["storage"]
    shell = data["shell"]
    logging_section = data["logging"]
    credits = data["credits"]

    raw_path = _require_str(storage["path"], field="storage.path", empty=True)
    level = _require_str(logging_section["level"], field="logging.level")
    if level.upper() not in _LEVELS:
        raise ConfigError(
            "'logging.level' must be one of: {0}.".format(
                ", ".join(sorted(_LEVELS))
            )
        )
    authors = credits["authors"]
    if not isinstance(authors, list) or not all(
        isinstance(item, str) for item in authors
    ):
        raise ConfigError("'credits.authors' must be a list of strings.")

    return TrainerConfig(
        storage=StorageConfig(
            path=Path(raw_path).expanduser() if raw_path else None,
            seed_defaults=_require_bool(
                storage["seed_defaults"], field="storage.seed_defaults"
            ),
        ),
        shell=ShellConfig(
            prompt=_require_str(
                shell["prompt"], field="shell.prompt", strip=False
            ),
            prompt_style=_require_str(
                shell["prompt_style"], field="shell.prompt_style"
            ),
            question_style=_require_str(
                shell["question_style"], field="shell.question_style"
            ),
        ),
        logging=LoggingConfig(
            level=level.upper(),
            verbose=_require_bool(
                logging_section["verbose"], field="logging.verbose"
            ),
        ),
        credits=CreditsConfig(authors=tuple(authors)),
        source=source,
    )


def _require_bool(value: Any, *, field: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{field}' must be a boolean.")
    return value


def _require_str(
    value: Any, *, field: str, empty: bool = False, strip: bool = True
) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"'{field}' must be a string.")
    text = value.strip() if strip else value
    if not text and not empty:
        raise ConfigError(f"'{field}' must be a non-empty string.")
    return text
