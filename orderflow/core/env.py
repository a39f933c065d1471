"""
Environment access for configuration loading.

Reads ORDERFLOW_* settings from the process environment, optionally seeded
from a .env file (python-dotenv), and expands ${VAR} references inside
values loaded from YAML config files.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# ${VAR}, ${VAR:-fallback} or ${VAR:?message}
_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[-?])(?P<arg>[^}]*))?\}")

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


class EnvManager:
    """
    Reads settings from the environment.

    Args:
        project_root: Directory holding the .env file (defaults to cwd)
        auto_load: Load that .env file right away
    """

    def __init__(self, project_root: Path | str | None = None, auto_load: bool = True):
        self.project_root = Path(project_root) if project_root else Path.cwd()
        if auto_load:
            self.load()

    def load(self, override: bool = False) -> bool:
        """Load <project_root>/.env into os.environ. False if there is none."""
        dotenv_path = self.project_root / ".env"
        if not dotenv_path.is_file():
            return False
        load_dotenv(dotenv_path, override=override)
        return True

    def get(self, key: str, default: str | None = None, required: bool = False) -> str | None:
        value = os.environ.get(key, default)
        if value is None and required:
            msg = f"Required environment variable not set: {key}"
            raise ValueError(msg)
        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """true/1/yes/on and false/0/no/off, anything else gives default."""
        value = (self.get(key) or "").strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        return default

    def substitute(self, text: str) -> str:
        """
        Expand environment references in text.

        ${VAR} is left untouched when VAR is unset, ${VAR:-fallback} uses the
        fallback, and ${VAR:?message} raises ValueError with the message.

            >>> os.environ["ORDERFLOW_IDS"] = "counter"
            >>> env.substitute("${ORDERFLOW_IDS:-collection_size}")
            'counter'
        """
        return _REFERENCE.sub(_expand, text)

    def substitute_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Copy of data with every nested string expanded."""
        return {key: self._substitute_value(value) for key, value in data.items()}

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self.substitute(value)
        if isinstance(value, dict):
            return self.substitute_dict(value)
        if isinstance(value, list):
            return [self._substitute_value(item) for item in value]
        return value


def _expand(match: re.Match[str]) -> str:
    name, op, arg = match.group("name", "op", "arg")
    value = os.environ.get(name)
    if value is not None:
        return value
    if op == "-":
        return arg
    if op == "?":
        raise ValueError(arg or f"Required variable not set: {name}")
    return match.group(0)


_global_env: EnvManager | None = None


def get_env() -> EnvManager:
    """Process-wide EnvManager rooted at the current directory."""
    global _global_env
    if _global_env is None:
        _global_env = EnvManager()
    return _global_env
