"""
nextlayer configuration management (YAML + environment overrides).
"""
from __future__ import annotations

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from nextlayer.core.exceptions import ConfigError
from nextlayer.core.layers import SearchPath
from nextlayer.core.resolver import LayeredPathResolver
from nextlayer.core.schemas import validate_payload
from nextlayer.core.utils.io import read_yaml
from nextlayer.core.utils.merge import deep_merge
from nextlayer.data import read_yaml as read_data_yaml

# Module logger (warnings are user-visible via CLI log config).
logger = logging.getLogger(__name__)

ENV_PREFIX = "NEXTLAYER_"
PATH_ENV = "NEXTLAYER_PATH"
CONFIG_ENV = "NEXTLAYER_CONFIG"
DEFAULT_CONFIG_NAME = "nextlayer.yaml"
CONFIG_SCHEMA = "config.schema"

# Handled explicitly, never treated as nested key overrides.
_RESERVED_ENV = {PATH_ENV, CONFIG_ENV}


class ConfigManager:
    """Load, merge, and validate nextlayer configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: NEXTLAYER_PATH (search roots) and
       NEXTLAYER_<section>__<key> (nested keys)
    2. Project config file: explicit path, $NEXTLAYER_CONFIG, or ./nextlayer.yaml
    3. Bundled defaults: nextlayer.data/config/defaults.yaml
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        *,
        cwd: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.config_path = self._locate_config(config_path)

    def _locate_config(self, explicit: Optional[Union[str, Path]]) -> Optional[Path]:
        raw = explicit or self.environ.get(CONFIG_ENV)
        if raw:
            path = Path(raw).expanduser()
            if not path.is_absolute():
                path = self.cwd / path
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}", context={"path": str(path)})
            return path
        candidate = self.cwd / DEFAULT_CONFIG_NAME
        return candidate if candidate.exists() else None

    @property
    def base_dir(self) -> Path:
        """Directory that relative roots in the config file are resolved against."""
        return self.config_path.parent if self.config_path is not None else self.cwd

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a YAML mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    def load_config(self, *, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration."""
        cfg: Dict[str, Any] = copy.deepcopy(read_data_yaml("config", "defaults.yaml"))
        if self.config_path is not None:
            logger.debug("Loading config from %s", self.config_path)
            cfg = deep_merge(cfg, self.load_yaml(self.config_path))
        self.apply_env_overrides(cfg)
        if validate:
            validate_payload(cfg, CONFIG_SCHEMA)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Return a config value by dot-notation key (e.g. ``resolver.style``)."""
        cur: Any = self.load_config(validate=False)
        for part in [p for p in key.split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur

    def search_path(self, cfg: Optional[Dict[str, Any]] = None) -> SearchPath:
        cfg = cfg if cfg is not None else self.load_config()
        return SearchPath.from_config(cfg, base_dir=self.base_dir)

    def build_resolver(self, cfg: Optional[Dict[str, Any]] = None) -> LayeredPathResolver:
        cfg = cfg if cfg is not None else self.load_config()
        return LayeredPathResolver.from_config(cfg, base_dir=self.base_dir)

    # ---------- Environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_", 1)
        if any(seg == "" for seg in segs):
            return []
        return [seg.lower() for seg in segs]

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def expand_roots(self, raw: str) -> List[str]:
        """Split an os.pathsep-joined root list; relative entries are cwd-relative."""
        roots: List[str] = []
        for entry in raw.split(os.pathsep):
            if not entry.strip():
                continue
            p = Path(os.path.expandvars(entry.strip())).expanduser()
            roots.append(str(p if p.is_absolute() else self.cwd / p))
        return roots

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for key in sorted(self.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV:
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX) :])
            if not path:
                logger.warning("Ignoring malformed environment override %s", key)
                continue
            self._set_nested(cfg, path, self._coerce_type(self.environ[key]))

        raw_path = self.environ.get(PATH_ENV)
        if raw_path:
            self._set_nested(cfg, ["search_path", "roots"], self.expand_roots(raw_path))


__all__ = ["ConfigManager", "ENV_PREFIX", "PATH_ENV", "CONFIG_ENV", "DEFAULT_CONFIG_NAME"]
