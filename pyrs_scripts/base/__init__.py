# SPDX-License-Identifier: BSD-3-Clause
"""
Base scripts for the pyrs development environment.

This package contains the Python scripts that replace the Install-Linux
shell scripts: prerequisite detection, installation, and the cargo build.
"""
