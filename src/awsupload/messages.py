"""
User-facing text for the aws-upload command.

Every function returns a string; printing is left to the caller.
"""

import shlex
from typing import List, Sequence

from .report import Report
from .setting_store import SettingStore, split_filename

BANNER = r"""
                                       _                 _
                                      | |               | |
  __ ___      _____ ______ _   _ _ __ | | ___   __ _  __| |
 / _` \ \ /\ / / __|______| | | | '_ \| |/ _ \ / _` |/ _` |
| (_| |\ V  V /\__ \      | |_| | |_) | | (_) | (_| | (_| |
 \__,_| \_/\_/ |___/       \__,_| .__/|_|\___/ \__,_|\__,_|
                                | |
                                |_|
"""

USAGE = """\
Usage:
  aws-upload <proj> <env> [--simulate] [-q | --quiet] [-v | --verbose]
  aws-upload <proj>.<env> [--simulate] [-q | --quiet] [-v | --verbose]

  aws-upload -h | --help
  aws-upload -V | --version

  aws-upload keys
  aws-upload projs
  aws-upload envs <proj>
  aws-upload new <key>               # The <key> format is proj.env eg: landing.test
  aws-upload edit <key>              # The <key> format is proj.env eg: landing.test
  aws-upload copy <src> <dest>       # <src> and <dest> are in the <key> format proj.env
  aws-upload check <key>             # The <key> format is proj.env eg: landing.test

Output Options:
  -v|--verbose                Output more verbose information.
  -q|--quiet                  Do not print the upload banner.
  --simulate                  Print the rsync command without uploading anything.

Miscellaneous Options:
  -h|--help                   Prints this usage information.
  -V|--version                Prints the version and exits.

Available commands:
  -k|--keys                   Print all the projects' keys.
  -p|--projs                  Print all the projects.
  -e|--envs <proj>            Print all the environments for a specific project.
  -n|--new <proj>.<env>       Create a new setting file.
  -E|--edit <proj>.<env>      Edit a setting file.
  -cp|--copy <src> <dest>     Copy a setting file.
  -c|--check <proj>.<env>     Check a setting file for debug.
"""


def version(number: str) -> str:
    return f"aws-upload version {number}\n"


def rsync_banner(project: str, env: str, cmd: str) -> str:
    return (
        "=================================\n"
        f"Proj: {shlex.quote(project)}\n"
        f"Env:  {shlex.quote(env)}\n"
        "Cmd:\n"
        f"{cmd}\n"
        "=================================\n"
    )


def table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render rows as a boxed, left-aligned text table."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: Sequence[str]) -> str:
        return "|" + "|".join(f" {c:<{w}} " for c, w in zip(cells, widths)) + "|"

    lines = [border, line(headers), border]
    lines.extend(line(row) for row in rows)
    lines.append(border)
    return "\n".join(lines) + "\n"


def proj_env_table(store: SettingStore) -> str:
    rows = [split_filename(name) for name in store.list()]
    return table(["Project", "Environment"], rows)


def on_no_projects() -> str:
    return (
        "It seems that you don't have any project setup.\n"
        "Try to type:\n\n"
        "    aws-upload new project.test\n"
    )


def on_no_copy_args() -> str:
    return (
        "It seems that you didn't give proper arguments for this command.\n"
        "Try to type:\n\n"
        "    aws-upload copy oldproject.test project.test\n"
    )


def on_no_project_arg() -> str:
    return (
        "Please specify a project.\n"
        "Try to type:\n\n"
        "    aws-upload envs project\n"
    )


def on_unknown_project(project: str, projects: List[str]) -> str:
    msg = f"The project {project} you are trying to use doesn't exist.\n\n"
    if not projects:
        return msg + on_no_projects()

    msg += "These are the available projects:\n\n"
    msg += "".join(f"  +  {proj}\n" for proj in projects)
    msg += (
        "\nTo get the envs from one of them, run (for example):\n\n"
        f"   aws-upload envs {projects[0]}\n"
    )
    return msg


def on_no_file_found(store: SettingStore, key: str) -> str:
    if not store.list():
        return on_no_projects()
    return (
        f"It seems that there is NO setting file for {key}\n\n"
        + proj_env_table(store)
    )


def on_invalid_key(key: str) -> str:
    return (
        f"It seems that the key {key} is not valid:\n\n"
        "Please try to use this format:\n"
        "    - [project].[environment]\n\n"
        "Examples of valid keys to create a new setting file:\n"
        "    - my-site.staging\n"
        "    - my-site.dev\n"
        "    - my-site.prod\n\n"
        "Tips on choosing the key name:\n"
        "    - for [project] and [environment] try to be: short, sweet, to the point\n"
        "    - use only one 'dot' . in the name\n"
    )


def on_key_already_exists(store: SettingStore, key: str) -> str:
    return (
        f"It seems that the key {key} already exists, try to use another one.\n\n"
        "Please consider you already have the following elements:\n"
        + proj_env_table(store)
    )


def on_new_success(key: str) -> str:
    return (
        f"The setting file {key}.json has been created successfully.\n\n"
        "To edit the file type:\n"
        f"    aws-upload edit {key}\n"
    )


def on_edit_success(key: str) -> str:
    return f"The setting file {key}.json has been edited successfully.\n"


def on_copy_success(source: str, dest: str) -> str:
    return (
        f"The setting file {source}.json has been copied to {dest}.json.\n\n"
        "To edit the new file type:\n"
        f"    aws-upload edit {dest}\n"
    )


def plot(condition: bool, good: str, bad: str) -> str:
    return good if condition else bad


def report_banner(report: Report) -> str:
    """Render a check report."""
    msg = (
        "File analysing:\n"
        f"{report.path}\n"
        f"Json:             {plot(report.is_valid_json, 'VALID', 'INVALID')}\n"
    )
    if not report.is_valid_json:
        msg += f" - {report.json_error.description}\n"
        return msg

    msg += (
        "\nPem File:\n"
        f"{report.pem or '(not set)'}\n"
        f"Pem:              {plot(report.pem_exists, 'EXISTS', 'NOT EXISTS')}\n"
    )
    if report.pem_exists:
        msg += f"Pem Perm:         {report.pem_perms}\n"
        if not report.pem_perms_ok:
            msg += f"Try to type: chmod 400 {shlex.quote(report.pem)}\n"

    msg += (
        "\nLocal Folder:\n"
        f"{report.local or '(not set)'}\n"
        f"Local Folder:     {plot(report.local_exists, 'EXISTS', 'NOT EXISTS')}\n"
    )
    return msg
