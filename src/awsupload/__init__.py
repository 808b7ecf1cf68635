"""
aws-upload - upload project folders to remote hosts with rsync.

Profiles are JSON setting files named ``<project>.<environment>.json``.
"""

__version__ = "1.0.0"

from .errors import (
    AlreadyExists,
    AwsUploadError,
    InvalidFormat,
    InvalidKey,
    InvalidSettings,
    NotFound,
)
from .report import JsonError, Report, inspect
from .rsync import (
    DEFAULT_EXCLUDES,
    RsyncCommand,
    build_rsync_command,
    check_rsync_available,
    run_rsync,
)
from .setting_store import SettingStore, default_settings_dir
from .settings import ProfileKey, Settings, parse_key, validate_key
