"""
Settings directory management.

Lists, loads, creates and copies the ``<project>.<environment>.json``
files kept in the settings directory.
"""

import json
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import AlreadyExists, InvalidFormat, NotFound
from .settings import Settings, parse_key

HOME_ENV_VAR = "AWSUPLOAD_HOME"
DEFAULT_DIR_NAME = ".aws-upload"


def default_settings_dir() -> Path:
    """
    Return the settings directory.

    ``$AWSUPLOAD_HOME`` when it is set, otherwise ``~/.aws-upload``.
    """
    home = os.environ.get(HOME_ENV_VAR)
    if home:
        return Path(home).expanduser()
    return Path.home() / DEFAULT_DIR_NAME


def split_filename(filename: str) -> List[str]:
    """Return [project, environment] for a setting filename, or [] if it isn't one."""
    parts = filename.split(".")
    if len(parts) != 3 or parts[2] != "json" or not parts[0] or not parts[1]:
        return []
    return parts[:2]


class SettingStore:
    """
    The directory holding one JSON setting file per profile.

    The directory does not have to exist until something is created in it.
    """

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.base_path}')"

    def list(self) -> List[str]:
        """
        List setting filenames.

        Returns:
            Sorted filenames matching ``*.*.json``, empty if the directory
            is missing
        """
        if not self.base_path.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.base_path.iterdir()
            if entry.is_file() and split_filename(entry.name)
        )

    def list_projects(self) -> List[str]:
        """Distinct project names, sorted."""
        return sorted({split_filename(name)[0] for name in self.list()})

    def list_envs(self, project: str) -> List[str]:
        """Environments configured for a project, sorted."""
        return sorted(
            env
            for proj, env in (split_filename(name) for name in self.list())
            if proj == project
        )

    def path_for(self, key: str) -> Path:
        """Path of the setting file for a key (whether or not it exists)."""
        return self.base_path / parse_key(key).filename

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def load(self, key: str) -> Dict[str, Any]:
        """
        Read and decode the setting file for a key.

        Required fields are not checked here; see load_settings().

        Raises:
            InvalidKey: If the key is malformed
            NotFound: If there is no setting file for the key
            InvalidFormat: If the file can't be read or is not a JSON object
        """
        path = self.path_for(key)
        if not path.is_file():
            raise NotFound(key, str(path))

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise InvalidFormat(str(path), f"cannot read file: {e}") from e
        except UnicodeDecodeError as e:
            raise InvalidFormat(str(path), f"malformed UTF-8: {e}") from e
        # JSONDecodeError, and oversized integers, are both ValueErrors
        except (ValueError, RecursionError) as e:
            raise InvalidFormat(str(path), str(e)) from e

        if not isinstance(data, dict):
            raise InvalidFormat(str(path), "top-level value is not an object")
        return data

    def load_settings(self, key: str) -> Settings:
        """Load a setting file and validate it into Settings."""
        return Settings.from_dict(self.load(key))

    def create(self, key: str) -> Path:
        """
        Create an empty setting file, ready to be edited.

        Returns:
            Path of the new file

        Raises:
            AlreadyExists: If a setting file for the key is already present
        """
        path = self.path_for(key)
        if path.exists():
            raise AlreadyExists(key, str(path))

        self.base_path.mkdir(parents=True, exist_ok=True)
        path.write_text("{}", encoding="utf-8")
        return path

    def copy(self, source_key: str, dest_key: str) -> Path:
        """
        Copy the setting file of one key to a new key.

        Returns:
            Path of the new file

        Raises:
            NotFound: If the source has no setting file
            AlreadyExists: If the destination already has one
        """
        source = self.path_for(source_key)
        dest = self.path_for(dest_key)

        if not source.is_file():
            raise NotFound(source_key, str(source))
        if dest.exists():
            raise AlreadyExists(dest_key, str(dest))

        shutil.copyfile(source, dest)
        return dest
