"""Defaults file for endpoint URL normalisation."""

from __future__ import annotations

import dataclasses
import os
import typing as typ
from pathlib import Path

from cyclopts import config as cyclopts_config
from ruamel.yaml import YAML

from .classify import DEFAULT_SCHEME
from .errors import ConfigError

CONFIG_DIRNAME = "endpoint-url"
CONFIG_FILENAME = "config.yaml"
ENDPOINT_SECTION = "endpoint"
DEFAULT_PORT = 9200

_yaml = YAML(typ="safe")
_yaml.default_flow_style = False


class _YamlConfig(cyclopts_config.ConfigFromFile):
    """Cyclopts config provider backed by ruamel.yaml."""

    def _load_config(self, path: Path) -> dict[str, typ.Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as handle:
            contents = _yaml.load(handle) or {}
        return dict(contents) if isinstance(contents, dict) else {}


@dataclasses.dataclass(frozen=True, slots=True)
class EndpointDefaults:
    """Defaults applied to endpoints that omit a scheme, path or port."""

    default_scheme: str = DEFAULT_SCHEME
    default_path: str = ""
    default_port: int = DEFAULT_PORT

    @classmethod
    def from_mapping(cls, payload: dict[str, typ.Any]) -> EndpointDefaults:
        """Build defaults from the ``endpoint`` section of the config file."""
        base = cls()
        scheme = payload.get("default_scheme", base.default_scheme)
        path = payload.get("default_path", base.default_path)
        port = payload.get("default_port", base.default_port)
        if not isinstance(scheme, str):
            raise ConfigError(f"default_scheme must be a string, got {scheme!r}.")
        if not isinstance(path, str):
            raise ConfigError(f"default_path must be a string, got {path!r}.")
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigError(f"default_port must be an integer, got {port!r}.")
        return cls(default_scheme=scheme, default_path=path, default_port=port)


def default_config_path() -> Path:
    """Return the config path, honouring ``XDG_CONFIG_HOME``."""
    root = os.environ.get("XDG_CONFIG_HOME")
    base = Path(root).expanduser() if root else Path.home() / ".config"
    return base / CONFIG_DIRNAME / CONFIG_FILENAME


def load_defaults(config_path: Path | None = None) -> EndpointDefaults:
    """Return the configured defaults, or built-in ones when no file exists."""
    path = config_path or default_config_path()
    provider = _YamlConfig(path=str(path), must_exist=False)
    raw = provider.config or {}
    data = dict(raw) if isinstance(raw, dict) else {}
    section = data.get(ENDPOINT_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section {ENDPOINT_SECTION!r} in {path} must be a mapping."
        )
    return EndpointDefaults.from_mapping(section)
