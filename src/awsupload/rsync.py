"""
rsync command construction and execution.

Builds the shell command line that uploads a profile's local directory
to its remote destination over ssh:

    rsync -ravze 'ssh -i <pem>' --exclude <pattern>... <local> <remote>

Every value taken from the settings is quoted with shlex.quote, so the
command can be handed to a POSIX shell as-is.
"""

import shlex
import subprocess
from typing import Any, List, Union

from .settings import Settings

RSYNC = "rsync"
RSYNC_FLAGS = "-ravze"

# Always excluded, after the profile's own patterns
DEFAULT_EXCLUDES = (".DS_Store",)


def check_rsync_available(program: str = RSYNC) -> bool:
    """Whether `<program> --version` runs, i.e. an upload can be attempted."""
    try:
        result = subprocess.run(
            [program, "--version"],
            capture_output=True,
            check=False
        )
    except OSError:
        # missing binary, or not executable
        return False
    return result.returncode == 0


def ssh_command(pem: str) -> str:
    """The remote shell rsync should use, authenticating with the pem file."""
    return f"ssh -i {shlex.quote(pem)}"


def build_rsync_args(settings: Settings) -> List[str]:
    """
    Build the rsync command as a list of shell-quoted words.

    Args:
        settings: Validated profile settings

    Returns:
        The command words, each safe to pass to a POSIX shell
    """
    args = [RSYNC, RSYNC_FLAGS, shlex.quote(ssh_command(settings.pem))]

    for pattern in settings.exclude:
        args.extend(["--exclude", shlex.quote(pattern)])

    for pattern in DEFAULT_EXCLUDES:
        args.extend(["--exclude", shlex.quote(pattern)])

    args.append(shlex.quote(settings.local))
    args.append(shlex.quote(settings.remote))

    return args


def build_rsync_command(settings: Settings) -> str:
    """Build the rsync command line for a profile as a single string."""
    return " ".join(build_rsync_args(settings))


class RsyncCommand:
    """
    The upload command for one profile.

    Accepts either Settings or the decoded setting file; anything else is
    rejected when the object is created, never when it is run.
    """

    def __init__(self, settings: Union[Settings, Any]):
        if not isinstance(settings, Settings):
            settings = Settings.from_dict(settings)
        self.settings = settings
        self.cmd = build_rsync_command(settings)

    def build(self) -> str:
        return self.cmd

    def __str__(self) -> str:
        return self.cmd

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.cmd!r})"


def run_rsync(cmd: Union[RsyncCommand, str]) -> int:
    """
    Run an rsync command line through the shell.

    rsync's output goes straight to the terminal.

    Args:
        cmd: The command to run

    Returns:
        rsync's exit code (130 if interrupted)
    """
    if not isinstance(cmd, str):
        cmd = cmd.build()

    try:
        result = subprocess.run(cmd, shell=True, check=False)
    except KeyboardInterrupt:
        return 130
    return result.returncode
