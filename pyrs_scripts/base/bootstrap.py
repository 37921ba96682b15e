#!/usr/bin/env python3
# SPDX-License-Identifier: BSD-3-Clause
"""
Development environment bootstrapper for pyrs.

Checks for rustup, cargo, gcc and m4, installs whichever are missing,
then builds the project with cargo. This replaces Install-Linux.sh.
"""

import argparse
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from pyrs_scripts.base.dependencies import AptPackageManager
from pyrs_scripts.base.errors import BuildFailed, InstallFailed, ToolNotFound
from pyrs_scripts.base.host import DEFAULT_ROOT, CargoBuilder, PathProbe
from pyrs_scripts.base.toolchain import DEFAULT_TOOLCHAIN, RustupInstaller
from pyrs_scripts.base.tools import get_supported_tools, get_tool_config


# Step outcomes
PRESENT = 'present'
INSTALLED = 'installed'
INSTALL_FAILED = 'install-failed'
BUILT = 'built'
BUILD_FAILED = 'build-failed'

BUILD_STEP = 'build'


# =============================================================================
# Report
# =============================================================================

@dataclass
class StepOutcome:
    """Result of one bootstrap step."""
    step: str
    status: str
    detail: str = ''
    errors: list = field(default_factory=list)


@dataclass
class BootstrapReport:
    """Ordered outcomes of a bootstrap run."""
    outcomes: List[StepOutcome] = field(default_factory=list)

    @property
    def versions(self) -> Dict[str, str]:
        return {o.step: o.detail for o in self.outcomes if o.status == PRESENT}

    @property
    def install_attempts(self) -> List[str]:
        return [o.step for o in self.outcomes
                if o.status in (INSTALLED, INSTALL_FAILED)]

    @property
    def errors(self) -> list:
        return [e for o in self.outcomes for e in o.errors]

    @property
    def exit_code(self) -> int:
        for error in self.errors:
            if isinstance(error, BuildFailed):
                return error.exit_code
        return 0


# =============================================================================
# Bootstrapper
# =============================================================================

class Bootstrapper:
    """Ensures build prerequisites are installed, then builds."""

    def __init__(self, probe, installers: dict, builder, tools: list = None):
        """
        Args:
            probe: Resolves tools (``is_installed``, ``version``)
            installers: Installer objects keyed by installer name
            builder: Runs the project build (``build``)
            tools: Prerequisites to check, in order (default: all)
        """
        self.probe = probe
        self.installers = installers
        self.builder = builder
        self.tools = tools or get_supported_tools()

    def ensure_installed(self, tool: str) -> StepOutcome:
        """Report a tool's version, or attempt a single install of it."""
        config = get_tool_config(tool)
        executable = config['executable']

        if self.probe.is_installed(executable):
            version = self.probe.version(executable)
            print(f"{tool} installed: {version}")
            return StepOutcome(tool, PRESENT, detail=version)

        missing = ToolNotFound(tool)
        print(f"{missing}, installing with {config['installer']}")
        installer = self.installers[config['installer']]
        try:
            installer.install(tool, config)
        except InstallFailed as e:
            print(f"Warning: {e}", file=sys.stderr)
            return StepOutcome(tool, INSTALL_FAILED, detail=e.reason,
                               errors=[missing, e])

        return StepOutcome(tool, INSTALLED, errors=[missing])

    def build(self) -> StepOutcome:
        try:
            self.builder.build()
        except BuildFailed as e:
            print(f"Error: {e}", file=sys.stderr)
            return StepOutcome(BUILD_STEP, BUILD_FAILED,
                               detail=str(e.returncode), errors=[e])
        return StepOutcome(BUILD_STEP, BUILT)

    def run(self) -> BootstrapReport:
        """Run every prerequisite step, then the build."""
        report = BootstrapReport()

        for tool in self.tools:
            print("\n" + "=" * 60)
            print(f"Checking {tool} ({get_tool_config(tool)['description']})")
            print("=" * 60)
            report.outcomes.append(self.ensure_installed(tool))

        print("\n" + "=" * 60)
        print("Building pyrs")
        print("=" * 60)
        report.outcomes.append(self.build())

        print_summary(report)
        return report


def print_summary(report: BootstrapReport):
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for outcome in report.outcomes:
        line = f"  {outcome.step:<8} {outcome.status}"
        if outcome.detail:
            line += f" ({outcome.detail})"
        print(line)


def print_tools():
    """Print every prerequisite with the packages that provide it."""
    for tool in get_supported_tools():
        config = get_tool_config(tool)
        packages = ', '.join(config['packages']) or 'rustup'
        print(f"  - {tool}: {config['description']} [{packages}]")


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv: list = None):
    parser = argparse.ArgumentParser(
        description='Install prerequisites and build pyrs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s                        # Check, install, build from the parent directory
  %(prog)s -r .                   # Build the current directory
  %(prog)s -n                     # Print install and build commands only
  %(prog)s -t nightly --release   # Nightly toolchain, release build
''',
    )

    parser.add_argument('-r', '--root', default=DEFAULT_ROOT,
                        help=f'Project root to build in (default: {DEFAULT_ROOT})')
    parser.add_argument('-t', '--toolchain', default=DEFAULT_TOOLCHAIN,
                        help=f'Rust toolchain to install (default: {DEFAULT_TOOLCHAIN})')
    parser.add_argument('--release', action='store_true',
                        help='Build with optimizations')
    parser.add_argument('-n', '--dry-run', action='store_true',
                        help='Print commands without executing')
    parser.add_argument('--no-sudo', action='store_true',
                        help='Run package manager commands without sudo')
    parser.add_argument('-l', '--list', action='store_true',
                        help='List prerequisites and exit')

    args = parser.parse_args(argv)

    if args.list:
        print("Prerequisites:")
        print_tools()
        sys.exit(0)

    if not os.path.isdir(args.root):
        print(f"Error: Project root not found: {args.root}", file=sys.stderr)
        sys.exit(1)

    bootstrapper = Bootstrapper(
        probe=PathProbe(),
        installers={
            'rustup': RustupInstaller(toolchain=args.toolchain,
                                      dry_run=args.dry_run),
            'apt': AptPackageManager(dry_run=args.dry_run,
                                     use_sudo=not args.no_sudo),
        },
        builder=CargoBuilder(root=args.root, release=args.release,
                             dry_run=args.dry_run),
    )

    try:
        report = bootstrapper.run()
    except KeyboardInterrupt:
        print("\nBootstrap interrupted.")
        sys.exit(130)

    sys.exit(report.exit_code)


if __name__ == '__main__':
    main()
