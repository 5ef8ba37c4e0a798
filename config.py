from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_DIR_NAME = "plaintasks"
CONFIG_FILE_NAME = "config.yaml"

DEFAULT_TODO_FILE = "todo.txt"
DEFAULT_DONE_FILE = "done.txt"
DEFAULT_PROJ_DIR = "todo_projects"

# Environment variable -> settings field.
ENV_KEYS = {
    "TODO_DIR": "todo_dir",
    "TODO_FILE": "todo_file",
    "DONE_FILE": "done_file",
    "TODO_PROJ_DIR": "proj_dir",
}


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    todo_dir: Path
    todo_file: Path
    done_file: Path
    proj_dir: Path


def _expand(value: str) -> Path:
    return Path(value).expanduser()


def default_config_path(env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """$XDG_CONFIG_HOME/plaintasks/config.yaml, then ~/.config/plaintasks/config.yaml."""
    env = os.environ if env is None else env
    xdg = env.get("XDG_CONFIG_HOME", "")
    if xdg:
        candidate = Path(xdg) / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    candidate = Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if candidate.exists():
        return candidate
    return None


def _load_config(path: Optional[Path]) -> Dict[str, Any]:
    if path is None or not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    return data


def load_settings(
    todo_dir: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> Settings:
    """Resolve settings: CLI flag > config file > env vars > defaults.

    Relative file names are resolved under the todo directory.
    """
    env = os.environ if env is None else env
    raw: Dict[str, str] = {
        "todo_dir": str(Path.home()),
        "todo_file": DEFAULT_TODO_FILE,
        "done_file": DEFAULT_DONE_FILE,
        "proj_dir": DEFAULT_PROJ_DIR,
    }
    for env_key, field_name in ENV_KEYS.items():
        value = (env.get(env_key) or "").strip()
        if value:
            raw[field_name] = value

    path = config_path if config_path is not None else default_config_path(env)
    for key, value in _load_config(path).items():
        if key in raw and value not in (None, ""):
            raw[key] = str(value)

    if todo_dir:
        raw["todo_dir"] = todo_dir

    base = _expand(raw["todo_dir"])

    def resolve(name: str) -> Path:
        candidate = _expand(raw[name])
        return candidate if candidate.is_absolute() else base / candidate

    return Settings(
        todo_dir=base,
        todo_file=resolve("todo_file"),
        done_file=resolve("done_file"),
        proj_dir=resolve("proj_dir"),
    )


def save_config(data: Dict[str, Any], path: Path) -> None:
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
