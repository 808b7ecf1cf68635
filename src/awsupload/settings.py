"""
Profile keys and the settings stored for each profile.

A profile is identified by a ``project.environment`` key and stored as
``<project>.<environment>.json`` in the settings directory.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from .errors import InvalidKey, InvalidSettings

REQUIRED_FIELDS = ("pem", "local", "remote")


@dataclass(frozen=True)
class ProfileKey:
    """A (project, environment) pair."""
    project: str
    environment: str

    @property
    def filename(self) -> str:
        return f"{self.project}.{self.environment}.json"

    def __str__(self) -> str:
        return f"{self.project}.{self.environment}"


def validate_key(key: str) -> bool:
    """
    Check that a key has the ``project.environment`` format.

    Exactly one dot, with something on both sides of it.
    """
    if not isinstance(key, str):
        return False
    parts = key.split(".")
    return len(parts) == 2 and all(parts)


def parse_key(key: str) -> ProfileKey:
    """
    Split a key into a ProfileKey.

    Raises:
        InvalidKey: If the key is not in ``project.environment`` format
    """
    if not validate_key(key):
        raise InvalidKey(key)
    project, environment = key.split(".")
    return ProfileKey(project, environment)


@dataclass(frozen=True)
class Settings:
    """Transfer configuration for one profile."""
    pem: str
    local: str
    remote: str
    exclude: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise InvalidSettings(f"'{name}' must be a non-empty string")
        # rsync would read these as options
        for name in ("local", "remote"):
            if getattr(self, name).startswith("-"):
                raise InvalidSettings(f"'{name}' must not start with '-'")
        if not isinstance(self.exclude, (list, tuple)) or not all(
            isinstance(pattern, str) for pattern in self.exclude
        ):
            raise InvalidSettings("'exclude' must be a list of strings")
        # exclude is always a tuple
        object.__setattr__(self, "exclude", tuple(self.exclude))

    @classmethod
    def from_dict(cls, data: Any) -> "Settings":
        """
        Build Settings from a parsed setting file.

        Args:
            data: The decoded JSON object

        Returns:
            A fully validated Settings

        Raises:
            InvalidSettings: If data is not a non-empty mapping, a required
                field is missing or empty, or exclude is not a list of strings
        """
        if not isinstance(data, Mapping) or not data:
            raise InvalidSettings(
                f"Settings must be a non-empty object, got {type(data).__name__}"
            )

        missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
        if missing:
            raise InvalidSettings(f"Missing required settings: {', '.join(missing)}")

        exclude = data.get("exclude")
        if exclude is None:
            exclude = []
        if not isinstance(exclude, list):
            raise InvalidSettings("'exclude' must be a list of strings")

        return cls(
            pem=data["pem"],
            local=data["local"],
            remote=data["remote"],
            exclude=tuple(exclude),
        )
