# SPDX-License-Identifier: BSD-3-Clause
"""
System package installer for pyrs development.

Installs the C toolchain and macro preprocessor through apt.
"""

import os
import sys

from pyrs_scripts.base.errors import InstallFailed
from pyrs_scripts.base.host import run_command


# Package manager commands (Debian family only)
PACKAGE_MANAGER = {
    'name': 'apt',
    'update_cmd': ['apt-get', 'update'],
    'install_cmd': ['apt-get', 'install', '-y'],
}


class AptPackageManager:
    """Installs prerequisites from the system package index."""

    def __init__(self, dry_run: bool = False, use_sudo: bool = True):
        """
        Args:
            dry_run: If True, only print commands without executing
            use_sudo: If True, prefix commands with sudo when not root
        """
        self.dry_run = dry_run
        self.use_sudo = use_sudo
        self._updated = False
        self._update_error = None

    def _run(self, cmd: list) -> int:
        if self.use_sudo and os.geteuid() != 0:
            cmd = ['sudo'] + cmd
        return run_command(cmd, dry_run=self.dry_run)

    def install(self, tool: str, config: dict):
        """Install the packages providing a tool.

        The package index is refreshed before the first install of a run.
        A failed refresh is reported and the install runs from the existing
        index.

        Raises:
            InstallFailed: no packages are configured, or the install exited
                non-zero
        """
        packages = config.get('packages') or []
        if not packages:
            raise InstallFailed(tool, 'no packages configured')

        if not self._updated:
            result = self._run(PACKAGE_MANAGER['update_cmd'])
            self._updated = True
            if result != 0:
                self._update_error = f"package index update exited with code {result}"
                print(f"Warning: {self._update_error}", file=sys.stderr)

        result = self._run(PACKAGE_MANAGER['install_cmd'] + packages)
        if result != 0:
            reason = f"{' '.join(packages)} install exited with code {result}"
            if self._update_error:
                reason += f" after {self._update_error}"
            raise InstallFailed(tool, reason)
