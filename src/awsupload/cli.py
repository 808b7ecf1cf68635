"""
aws-upload - upload a project folder to a remote host with rsync

Usage: aws-upload <proj> <env> [--simulate] [-q | --quiet] [-v | --verbose]

Each project/environment pair has a JSON setting file in the settings
directory ($AWSUPLOAD_HOME, or ~/.aws-upload):

    {
        "pem": "/home/user/certificates/site.pem",
        "local": "/home/user/projects/site/",
        "remote": "ec2-user@example.com:/var/www/html/site",
        "exclude": [".env", ".git/"]
    }

Run `aws-upload --help` for the other commands.
"""

import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from . import __version__, messages
from .errors import (
    AlreadyExists,
    AwsUploadError,
    InvalidFormat,
    InvalidSettings,
    NotFound,
)
from .report import inspect
from .rsync import RsyncCommand, check_rsync_available, run_rsync
from .setting_store import SettingStore, default_settings_dir
from .settings import validate_key

DEFAULT_EDITOR = "vi"


@dataclass
class Options:
    """Output flags shared by all commands."""
    simulate: bool = False
    quiet: bool = False
    verbose: bool = False


def prt_error(*args, **kwargs):
    return print(*args, file=sys.stderr, **kwargs)


def require_key(store: SettingStore, args: List[str]) -> Optional[str]:
    """
    Return the single key argument, or None after explaining what's wrong.
    """
    if not args:
        if not store.list():
            prt_error(messages.on_no_projects())
        else:
            prt_error("Please specify a key in the format proj.env\n")
            prt_error(messages.proj_env_table(store))
        return None

    key = args[0]
    if not validate_key(key):
        prt_error(messages.on_invalid_key(key))
        return None
    return key


def cmd_keys(store: SettingStore, args: List[str], options: Options) -> int:
    """Print the project/environment table."""
    if not store.list():
        prt_error(messages.on_no_projects())
        return 0
    print(messages.proj_env_table(store), end="")
    return 0


def cmd_projs(store: SettingStore, args: List[str], options: Options) -> int:
    projects = store.list_projects()
    if not projects:
        prt_error(messages.on_no_projects())
        return 0
    for project in projects:
        print(project)
    return 0


def cmd_envs(store: SettingStore, args: List[str], options: Options) -> int:
    if not args:
        prt_error(messages.on_no_project_arg())
        return 1

    project = args[0]
    envs = store.list_envs(project)
    if not envs:
        prt_error(messages.on_unknown_project(project, store.list_projects()))
        return 1
    for env in envs:
        print(env)
    return 0


def cmd_new(store: SettingStore, args: List[str], options: Options) -> int:
    key = require_key(store, args)
    if key is None:
        return 1

    try:
        path = store.create(key)
    except AlreadyExists:
        prt_error(messages.on_key_already_exists(store, key))
        return 1

    if options.verbose:
        prt_error(f"Created: {path}")
    prt_error(messages.on_new_success(key))
    return 0


def cmd_edit(store: SettingStore, args: List[str], options: Options) -> int:
    key = require_key(store, args)
    if key is None:
        return 1

    if not store.exists(key):
        prt_error(messages.on_no_file_found(store, key))
        return 1

    editor = os.environ.get("EDITOR") or DEFAULT_EDITOR
    path = store.path_for(key)
    try:
        editor_args = shlex.split(editor)
    except ValueError as e:
        prt_error(f"Error: cannot parse EDITOR {editor!r}: {e}")
        return 1

    try:
        result = subprocess.run(editor_args + [str(path)], check=False)
    except FileNotFoundError:
        prt_error(f"Error: editor not found: {editor}")
        return 1

    if result.returncode != 0:
        prt_error(f"Error: {editor} exited with code {result.returncode}")
        return result.returncode

    prt_error(messages.on_edit_success(key))
    return 0


def cmd_copy(store: SettingStore, args: List[str], options: Options) -> int:
    if len(args) != 2:
        prt_error(messages.on_no_copy_args())
        return 1

    source, dest = args
    for key in (source, dest):
        if not validate_key(key):
            prt_error(messages.on_invalid_key(key))
            return 1

    try:
        store.copy(source, dest)
    except NotFound:
        prt_error(messages.on_no_file_found(store, source))
        return 1
    except AlreadyExists:
        prt_error(messages.on_key_already_exists(store, dest))
        return 1

    prt_error(messages.on_copy_success(source, dest))
    return 0


def cmd_check(store: SettingStore, args: List[str], options: Options) -> int:
    key = require_key(store, args)
    if key is None:
        return 1

    try:
        report = inspect(store, key)
    except NotFound:
        prt_error(messages.on_no_file_found(store, key))
        return 1

    prt_error(messages.report_banner(report))
    return 0


def cmd_upload(store: SettingStore, args: List[str], options: Options) -> int:
    """Upload the local folder of a profile to its remote destination."""
    if len(args) == 2:
        key = ".".join(args)
    elif len(args) == 1:
        key = args[0]
    else:
        prt_error(messages.USAGE)
        return 1

    if not validate_key(key):
        prt_error(messages.on_invalid_key(key))
        return 1

    try:
        settings = store.load_settings(key)
    except NotFound:
        prt_error(messages.on_no_file_found(store, key))
        return 1
    except (InvalidFormat, InvalidSettings) as e:
        prt_error(f"Error: {e}")
        prt_error(f"Try to type:\n\n    aws-upload check {key}\n")
        return 1

    rsync = RsyncCommand(settings)
    project, env = key.split(".")

    if options.verbose:
        prt_error(f"Setting file: {store.path_for(key)}")
    if not options.quiet:
        prt_error(messages.rsync_banner(project, env, rsync.build()))

    if options.simulate:
        print(rsync.build())
        return 0

    if not check_rsync_available():
        prt_error("Error: rsync is not available on this system.")
        return 1

    returncode = run_rsync(rsync)
    if returncode == 0:
        if not options.quiet:
            prt_error("\n✓ Upload completed successfully!")
    else:
        prt_error(f"\n✗ rsync exited with code {returncode}")
    return returncode


COMMANDS: Dict[str, Callable[[SettingStore, List[str], Options], int]] = {
    "keys": cmd_keys, "-k": cmd_keys, "--keys": cmd_keys,
    "projs": cmd_projs, "-p": cmd_projs, "--projs": cmd_projs,
    "envs": cmd_envs, "-e": cmd_envs, "--envs": cmd_envs,
    "new": cmd_new, "-n": cmd_new, "--new": cmd_new,
    "edit": cmd_edit, "-E": cmd_edit, "--edit": cmd_edit,
    "copy": cmd_copy, "-cp": cmd_copy, "--copy": cmd_copy,
    "check": cmd_check, "-c": cmd_check, "--check": cmd_check,
}


def run(argv: List[str], store: Optional[SettingStore] = None) -> int:
    """
    Run aws-upload with the given arguments (without the program name).

    Returns:
        The process exit code
    """
    if "-h" in argv or "--help" in argv or not argv:
        prt_error(messages.BANNER)
        prt_error(messages.USAGE)
        return 0 if argv else 1

    if "-V" in argv or "--version" in argv:
        print(messages.version(__version__), end="")
        return 0

    options = Options(
        simulate="--simulate" in argv,
        quiet="-q" in argv or "--quiet" in argv,
        verbose="-v" in argv or "--verbose" in argv,
    )
    args = [
        arg for arg in argv
        if arg not in ("--simulate", "-q", "--quiet", "-v", "--verbose")
    ]
    if not args:
        prt_error(messages.USAGE)
        return 1

    if store is None:
        store = SettingStore(default_settings_dir())

    command, rest = args[0], args[1:]
    if command in COMMANDS:
        handler = COMMANDS[command]
    elif command.startswith("-"):
        prt_error(f"Error: unknown option {command}\n")
        prt_error(messages.USAGE)
        return 1
    else:
        handler, rest = cmd_upload, args

    try:
        return handler(store, rest, options)
    except AwsUploadError as e:
        prt_error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        prt_error("\n\nInterrupted by user.")
        return 130


def main():
    """Main function for the aws-upload command."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
