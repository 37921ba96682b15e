# SPDX-License-Identifier: BSD-3-Clause
"""
Rust toolchain installer for pyrs.

Bootstraps rustup from its installer script and installs a toolchain.
This replaces the curl-pipe-to-sh step of Install-Linux.sh.
"""

import http.client
import shutil
import ssl
import urllib.error
import urllib.request

from pyrs_scripts.base.errors import InstallFailed
from pyrs_scripts.base.host import cargo_env, run_command


# =============================================================================
# Version Configuration
# =============================================================================

RUSTUP_URL = 'https://sh.rustup.rs'

DEFAULT_TOOLCHAIN = 'stable'

# Unattended rustup-init; the script is read from stdin
RUSTUP_INIT_CMD = ['sh', '-s', '--', '-y']


# =============================================================================
# Helper Functions
# =============================================================================

def fetch_script(url: str) -> str:
    """Download an installer script over HTTPS with TLS 1.2 or newer."""
    print(f"Downloading: {url}")
    if not url.startswith('https://'):
        raise ValueError(f"Refusing non-HTTPS URL: {url}")

    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2

    with urllib.request.urlopen(url, context=context) as response:
        final_url = response.geturl()
        if not final_url.startswith('https://'):
            raise ValueError(f"Redirected to non-HTTPS URL: {final_url}")
        return response.read().decode('utf-8')


# =============================================================================
# Installer
# =============================================================================

class RustupInstaller:
    """Installs rustup and a Rust toolchain."""

    def __init__(self, toolchain: str = DEFAULT_TOOLCHAIN,
                 url: str = RUSTUP_URL, dry_run: bool = False):
        """
        Args:
            toolchain: Toolchain to install (e.g., stable, nightly)
            url: rustup-init script location
            dry_run: If True, only print commands without executing
        """
        self.toolchain = toolchain
        self.url = url
        self.dry_run = dry_run

    def has_rustup(self) -> bool:
        return shutil.which('rustup', path=cargo_env()['PATH']) is not None

    def bootstrap(self, tool: str = 'rustup'):
        """Fetch and run rustup-init."""
        if self.dry_run:
            print(f"Downloading: {self.url}")
            run_command(RUSTUP_INIT_CMD, dry_run=True)
            return

        try:
            script = fetch_script(self.url)
        except (urllib.error.URLError, http.client.HTTPException, OSError,
                ValueError) as e:
            raise InstallFailed(tool, f"download failed: {e}") from e

        result = run_command(RUSTUP_INIT_CMD, stdin=script)
        if result != 0:
            raise InstallFailed(tool, f"rustup-init exited with code {result}")

    def install(self, tool: str, config: dict):
        """Install a tool provided by rustup.

        Raises:
            InstallFailed: the bootstrap or toolchain install failed
        """
        print(f"Installing {tool} with the {self.toolchain} toolchain")
        if not self.has_rustup():
            self.bootstrap(tool)

        result = run_command(['rustup', 'toolchain', 'install', self.toolchain],
                             env=cargo_env(), dry_run=self.dry_run)
        if result != 0:
            raise InstallFailed(
                tool, f"rustup toolchain install exited with code {result}")
