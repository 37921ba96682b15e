"""
Test fixtures for the pyrs bootstrapper.

Provides a fake host (probe, installers, builder) so the bootstrapper can be
exercised without touching PATH, apt, the network or cargo.
"""
import stat
from pathlib import Path

import pytest

from pyrs_scripts.base.bootstrap import Bootstrapper
from pyrs_scripts.base.errors import BuildFailed, InstallFailed


class FakeProbe:
    """Resolves a fixed set of executables."""

    def __init__(self, installed=(), versions=None):
        self.installed = set(installed)
        self.versions = versions or {}
        self.version_queries = []

    def is_installed(self, executable: str) -> bool:
        return executable in self.installed

    def version(self, executable: str) -> str:
        self.version_queries.append(executable)
        return self.versions.get(executable, f"{executable} 1.0.0")


class FakeInstaller:
    """Records install calls; fails for the configured tools."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.calls = []

    def install(self, tool: str, config: dict):
        self.calls.append(tool)
        if tool in self.fail:
            raise InstallFailed(tool, "network unreachable")


class FakeBuilder:
    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.calls = 0

    def build(self):
        self.calls += 1
        if self.returncode != 0:
            raise BuildFailed(self.returncode)


class FakeHost:
    """Bundles fake capabilities and builds a Bootstrapper over them."""

    def __init__(self, installed=(), fail=(), build_returncode=0):
        self.probe = FakeProbe(installed)
        self.rustup = FakeInstaller(fail)
        self.apt = FakeInstaller(fail)
        self.builder = FakeBuilder(build_returncode)

    @property
    def install_calls(self):
        return self.rustup.calls + self.apt.calls

    def bootstrapper(self) -> Bootstrapper:
        return Bootstrapper(
            probe=self.probe,
            installers={'rustup': self.rustup, 'apt': self.apt},
            builder=self.builder,
        )


ALL_TOOLS = ('rustup', 'cargo', 'gcc', 'm4')


@pytest.fixture
def provisioned_host():
    """Host with every prerequisite on PATH."""
    return FakeHost(installed=ALL_TOOLS)


@pytest.fixture
def bare_host():
    """Host with no prerequisites on PATH."""
    return FakeHost()


@pytest.fixture
def recorded_commands(monkeypatch):
    """Capture run_command calls in every module that imports it."""
    calls = []
    results = {}

    def fake_run_command(cmd, env=None, cwd=None, stdin=None, dry_run=False):
        calls.append({'cmd': list(cmd), 'env': env, 'cwd': cwd,
                      'stdin': stdin, 'dry_run': dry_run})
        if dry_run:
            return 0
        line = " ".join(cmd)
        for fragment, code in results.items():
            if fragment in line:
                return code
        return 0

    from pyrs_scripts.base import dependencies, host, toolchain
    for module in (dependencies, host, toolchain):
        monkeypatch.setattr(module, 'run_command', fake_run_command)

    fake_run_command.calls = calls
    fake_run_command.results = results
    return fake_run_command


def make_executable(directory: Path, name: str, body: str) -> Path:
    """Write a shell script into ``directory`` and mark it executable."""
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def bin_dir(tmp_path):
    directory = tmp_path / 'bin'
    directory.mkdir()
    return directory


@pytest.fixture
def cargo_home(tmp_path, monkeypatch):
    """Point CARGO_HOME at an empty directory."""
    home = tmp_path / 'cargo'
    (home / 'bin').mkdir(parents=True)
    monkeypatch.setenv('CARGO_HOME', str(home))
    return home


@pytest.fixture
def empty_path(tmp_path, monkeypatch):
    """Restrict PATH to a directory with nothing in it."""
    directory = tmp_path / 'empty'
    directory.mkdir()
    monkeypatch.setenv('PATH', str(directory))
    return directory
