"""
Loading and validation of plugin configuration for munin_probes.

Pydantic describes the schema.  Values come from the model defaults, then an
optional YAML/JSON file, then the ``env.*`` settings munin-node exports from
``plugin-conf.d``.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = (
    "HttpLoadConfig",
    "FtpLoginsConfig",
    "load_http_config",
    "load_ftp_config",
)


class HttpLoadConfig(BaseModel):
    """Settings for the web page probe."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url_file: Path = Field(
        Path("/etc/munin/http_load_urls.txt"), description="List of monitored URLs, one per line."
    )
    cache_dir: Path = Field(
        Path("/var/lib/munin/plugin-state"), description="Directory holding the measurement caches."
    )
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    max_redirects: int = Field(10, ge=0, description="Redirects followed before giving up.")
    user_agent: str = Field(
        "Mozilla/5.0 (munin http_load)", min_length=1, description="User-Agent header."
    )
    graph_category: str = Field("network", min_length=1, description="Munin graph_category.")
    instance_prefix: str = Field(
        "http_load_", min_length=1, description="Plugin name before <url_id>_<category>."
    )

    @field_validator("url_file", "cache_dir", mode="before")
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        return v


class FtpLoginsConfig(BaseModel):
    """Settings for the FTP login counter."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    log_file: Path = Field(Path("/var/log/vsftpd.log"), description="FTP server log to scan.")
    ok_pattern: str = Field("OK LOGIN", min_length=1, description="Substring of a successful login.")
    fail_pattern: str = Field("FAIL LOGIN", min_length=1, description="Substring of a failed login.")


# munin env name -> model field
_HTTP_ENV: Dict[str, str] = {
    "urllist": "url_file",
    "cachedir": "cache_dir",
    "timeout": "timeout",
    "max_redirects": "max_redirects",
    "useragent": "user_agent",
    "category": "graph_category",
}
_FTP_ENV: Dict[str, str] = {
    "logfile": "log_file",
    "ok_pattern": "ok_pattern",
    "fail_pattern": "fail_pattern",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_file(path: Union[str, Path, None]) -> dict[str, Any]:
    if path is None:
        return {}
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def _from_env(env: Mapping[str, str], names: Mapping[str, str]) -> dict[str, Any]:
    return {field: env[name] for name, field in names.items() if env.get(name)}


def load_http_config(
    path: Union[str, Path, None] = None, env: Optional[Mapping[str, str]] = None
) -> HttpLoadConfig:
    """
    Build an HttpLoadConfig from an optional YAML/JSON file and munin env settings.
    An explicit path that does not exist raises FileNotFoundError.
    """
    env = os.environ if env is None else env
    data = _read_file(path)
    if env.get("MUNIN_PLUGSTATE") and "cache_dir" not in data:
        data["cache_dir"] = env["MUNIN_PLUGSTATE"]
    data.update(_from_env(env, _HTTP_ENV))
    return HttpLoadConfig(**data)


def load_ftp_config(
    path: Union[str, Path, None] = None, env: Optional[Mapping[str, str]] = None
) -> FtpLoginsConfig:
    """Build an FtpLoginsConfig the same way as :func:`load_http_config`."""
    env = os.environ if env is None else env
    data = _read_file(path)
    data.update(_from_env(env, _FTP_ENV))
    return FtpLoginsConfig(**data)
