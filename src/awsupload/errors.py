"""
Exceptions raised by the aws-upload core.

The core never prints or exits; the CLI catches these and turns them
into messages on stderr.
"""

from typing import Optional


class AwsUploadError(Exception):
    """Base class for all aws-upload errors."""


class InvalidKey(AwsUploadError, ValueError):
    """A key does not have the ``project.environment`` format."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid key: {key!r} (expected project.environment)")


class NotFound(AwsUploadError, FileNotFoundError):
    """No setting file exists for a key."""

    def __init__(self, key: str, path: Optional[str] = None):
        self.key = key
        self.path = path
        super().__init__(f"No setting file for {key}: {path}")


class AlreadyExists(AwsUploadError, FileExistsError):
    """A setting file for the key is already present."""

    def __init__(self, key: str, path: Optional[str] = None):
        self.key = key
        self.path = path
        super().__init__(f"Setting file for {key} already exists: {path}")


class InvalidFormat(AwsUploadError, ValueError):
    """A setting file could not be parsed as a JSON object."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid setting file {path}: {reason}")


class InvalidSettings(AwsUploadError, ValueError):
    """A settings value is missing a required field or has the wrong type."""
