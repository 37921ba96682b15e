# SPDX-License-Identifier: BSD-3-Clause
"""
Host access for the pyrs environment bootstrapper.

This module handles:
- Running external commands with logging
- Resolving tools on PATH and querying their versions
- Running the final cargo build
"""

import os
import shutil
import sys
from pathlib import Path

import sh

from pyrs_scripts.base.errors import BuildFailed, ToolNotFound


# Status returned by a shell for a command that cannot be found
COMMAND_NOT_FOUND = 127

UNKNOWN_VERSION = 'unknown version'

# Project root relative to the working directory (the scripts live one
# level below it)
DEFAULT_ROOT = os.pardir


def get_cargo_bin() -> Path:
    """Get the directory rustup installs cargo and rustup into."""
    cargo_home = os.environ.get('CARGO_HOME', os.path.join('~', '.cargo'))
    return Path(cargo_home).expanduser() / 'bin'


def cargo_env() -> dict:
    """Environment overrides that put a fresh rustup install on PATH."""
    return {
        'PATH': f"{get_cargo_bin()}{os.pathsep}{os.environ.get('PATH', '')}",
    }


def probe_path() -> str:
    """Process PATH followed by the directory rustup installs into."""
    return f"{os.environ.get('PATH', '')}{os.pathsep}{get_cargo_bin()}"


def run_command(cmd: list, env: dict = None, cwd: str = None,
                stdin: str = None, dry_run: bool = False) -> int:
    """Run a command with logging.

    Args:
        cmd: Command and arguments
        env: Variables merged over the current environment
        cwd: Working directory
        stdin: Text fed to the command's standard input
        dry_run: If True, only print the command

    Returns:
        Exit status of the command
    """
    print(f"  $ {' '.join(cmd)}")
    if dry_run:
        return 0

    merged_env = os.environ.copy()
    if env:
        merged_env.update(env)

    path = shutil.which(cmd[0], path=merged_env.get('PATH'))
    if path is None:
        print(f"Error: Command not found: {cmd[0]}", file=sys.stderr)
        return COMMAND_NOT_FOUND

    try:
        sh.Command(path)(*cmd[1:], _env=merged_env, _cwd=cwd, _in=stdin,
                         _out=sys.stdout, _err=sys.stderr)
    except sh.ErrorReturnCode as e:
        return e.exit_code
    return 0


class PathProbe:
    """Resolves prerequisites on PATH and in the cargo bin directory."""

    def __init__(self, path: str = None):
        """
        Args:
            path: Search path (defaults to the process PATH plus the cargo
                bin directory, read at lookup time)
        """
        self.path = path

    def search_path(self) -> str:
        return self.path if self.path is not None else probe_path()

    def is_installed(self, executable: str) -> bool:
        return shutil.which(executable, path=self.search_path()) is not None

    def version(self, executable: str) -> str:
        """Return the first line of ``<executable> --version``."""
        path = shutil.which(executable, path=self.search_path())
        if path is None:
            raise ToolNotFound(executable)

        try:
            output = str(sh.Command(path)('--version', _err_to_out=True))
        except (sh.ErrorReturnCode, sh.CommandNotFound):
            return UNKNOWN_VERSION

        for line in output.splitlines():
            if line.strip():
                return line.strip()
        return UNKNOWN_VERSION


class CargoBuilder:
    """Builds the project with cargo."""

    def __init__(self, root: str = DEFAULT_ROOT, release: bool = False,
                 dry_run: bool = False):
        self.root = Path(root).resolve()
        self.release = release
        self.dry_run = dry_run

    def command(self) -> list:
        cmd = ['cargo', 'build']
        if self.release:
            cmd.append('--release')
        return cmd

    def build(self):
        """Run the build in the project root.

        Raises:
            BuildFailed: the build exited non-zero or cargo is missing
        """
        print(f"Building: {self.root}")
        result = run_command(self.command(), env=cargo_env(),
                             cwd=str(self.root), dry_run=self.dry_run)
        if result != 0:
            raise BuildFailed(result)
