# SPDX-License-Identifier: BSD-3-Clause
"""Errors reported by the environment bootstrapper."""


class BootstrapError(Exception):
    """Base error for this package."""


class ToolNotFound(BootstrapError):
    """Raised when a prerequisite is not resolvable on PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"{tool} is not installed")


class InstallFailed(BootstrapError):
    """Raised when an install action for a prerequisite fails."""

    def __init__(self, tool: str, reason: str):
        self.tool = tool
        self.reason = reason
        super().__init__(f"Failed to install {tool}: {reason}")


class BuildFailed(BootstrapError):
    """Raised when the project build command fails."""

    def __init__(self, returncode: int):
        self.returncode = returncode
        self.exit_code = returncode or 1
        super().__init__(f"Build failed with exit code {returncode}")
