# SPDX-License-Identifier: BSD-3-Clause
"""
Build prerequisite configuration for pyrs.

This module defines, in the order they are checked:
- The executable looked up on PATH
- The installer responsible for each tool
- The system packages that provide it
"""

# Prerequisite configurations
TOOL_CONFIG = {
    'rustup': {
        'executable': 'rustup',
        'description': 'Rust toolchain manager',
        'installer': 'rustup',
        'packages': [],
    },
    'cargo': {
        'executable': 'cargo',
        'description': 'Rust package build driver',
        'installer': 'rustup',
        'packages': [],
    },
    'gcc': {
        'executable': 'gcc',
        'description': 'GNU C compiler',
        'installer': 'apt',
        'packages': ['build-essential', 'libgmp-dev', 'libmpfr-dev'],
    },
    'm4': {
        'executable': 'm4',
        'description': 'GNU m4 macro preprocessor',
        'installer': 'apt',
        'packages': ['m4'],
    },
}


def get_tool_config(tool: str) -> dict:
    """Get prerequisite configuration by name."""
    if tool not in TOOL_CONFIG:
        raise ValueError(f"Unsupported tool: {tool}. "
                        f"Supported: {list(TOOL_CONFIG.keys())}")
    return TOOL_CONFIG[tool]


def get_supported_tools() -> list:
    """Get list of prerequisites in check order."""
    return list(TOOL_CONFIG.keys())
