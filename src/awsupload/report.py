"""
Diagnostics for a setting file.

Reports whether the file parses, whether its pem exists with 400
permissions and whether its local folder exists. Nothing is modified.
"""

import json
import os
import stat
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from .errors import NotFound
from .setting_store import SettingStore

REQUIRED_PEM_PERMS = "400"


class JsonError(Enum):
    """Why a setting file failed to parse."""
    NONE = ""
    DEPTH = "Maximum stack depth exceeded"
    CTRL_CHAR = "Unexpected control character found"
    SYNTAX = "Syntax error, malformed JSON"
    UTF8 = "Malformed UTF-8 characters, possibly incorrectly encoded"
    NOT_OBJECT = "Top-level value is not a JSON object"
    UNREADABLE = "File could not be read"

    @property
    def description(self) -> str:
        return self.value


@dataclass
class Report:
    """Snapshot of a setting file's state on disk."""
    key: str
    path: str
    is_valid_json: bool
    json_error: JsonError
    pem: Optional[str] = None
    pem_exists: bool = False
    pem_perms: Optional[str] = None
    local: Optional[str] = None
    local_exists: bool = False

    @property
    def pem_perms_ok(self) -> bool:
        return self.pem_perms == REQUIRED_PEM_PERMS


def classify_json(raw: bytes) -> Tuple[JsonError, Any]:
    """
    Decode a setting file's raw content.

    Returns:
        (error classification, decoded value or None)
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return JsonError.UTF8, None

    try:
        data = json.loads(text)
    except RecursionError:
        return JsonError.DEPTH, None
    except json.JSONDecodeError as e:
        if e.msg.startswith("Invalid control character"):
            return JsonError.CTRL_CHAR, None
        return JsonError.SYNTAX, None
    except ValueError:
        # e.g. an integer longer than the int conversion limit
        return JsonError.SYNTAX, None

    if not isinstance(data, dict):
        return JsonError.NOT_OBJECT, None
    return JsonError.NONE, data


def resolve_path(value: Any) -> Optional[str]:
    """Absolute form of a path taken from a setting file, or None if unusable."""
    if not isinstance(value, str) or not value:
        return None
    return os.path.abspath(os.path.expanduser(value))


def file_perms(path: str) -> str:
    """Permission bits of a file as an octal string, e.g. '400'."""
    return format(stat.S_IMODE(os.stat(path).st_mode), "o")


def inspect(store: SettingStore, key: str) -> Report:
    """
    Build a Report for the setting file of a key.

    Raises:
        InvalidKey: If the key is malformed
        NotFound: If there is no setting file for the key
    """
    path = store.path_for(key)
    if not path.is_file():
        raise NotFound(key, str(path))

    try:
        json_error, data = classify_json(path.read_bytes())
    except OSError:
        json_error, data = JsonError.UNREADABLE, None

    report = Report(
        key=key,
        path=os.path.abspath(path),
        is_valid_json=json_error is JsonError.NONE,
        json_error=json_error,
    )
    if data is None:
        return report

    report.pem = resolve_path(data.get("pem"))
    if report.pem and os.path.isfile(report.pem):
        report.pem_exists = True
        report.pem_perms = file_perms(report.pem)

    report.local = resolve_path(data.get("local"))
    if report.local:
        report.local_exists = os.path.isdir(report.local)

    return report
