# File: munin_probes/ftp_logins.py
"""munin_probes.ftp_logins: successful and failed FTP logins counted from the server log."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from munin_probes.config import FtpLoginsConfig
from munin_probes.logger import logger

__all__ = ("LoginCounts", "count_logins", "autoconf", "render_config", "render_values")


@dataclass(slots=True)
class LoginCounts:
    ok: int = 0
    fail: int = 0


def count_logins(path: Union[str, Path], ok_pattern: str, fail_pattern: str) -> Optional[LoginCounts]:
    """Count lines containing each pattern; None when the log cannot be read."""
    counts = LoginCounts()
    try:
        with Path(path).open(encoding="utf-8", errors="replace") as fh:
            for line in fh:
                if ok_pattern in line:
                    counts.ok += 1
                if fail_pattern in line:
                    counts.fail += 1
    except OSError as exc:
        logger.warning("Cannot read FTP log %s: %s", path, exc)
        return None
    return counts


def autoconf(config: FtpLoginsConfig) -> str:
    path = config.log_file
    if not path.is_file():
        return f"no (log file {path} not found)"
    try:
        with path.open("rb"):
            pass
    except OSError as exc:
        return f"no ({exc.strerror})"
    return "yes"


def render_config(config: FtpLoginsConfig) -> List[str]:
    return [
        "graph_title FTP logins",
        "graph_args --base 1000 -l 0",
        "graph_vlabel logins per ${graph_period}",
        "graph_category network",
        f"graph_info Login events found in {config.log_file}.",
        "ok.label successful",
        "ok.type DERIVE",
        "ok.min 0",
        "fail.label failed",
        "fail.type DERIVE",
        "fail.min 0",
    ]


def render_values(config: FtpLoginsConfig) -> List[str]:
    counts = count_logins(config.log_file, config.ok_pattern, config.fail_pattern)
    if counts is None:
        return ["ok.value U", "fail.value U"]
    return [f"ok.value {counts.ok}", f"fail.value {counts.fail}"]
