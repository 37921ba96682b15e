# SPDX-License-Identifier: BSD-3-Clause
"""
Development scripts for the pyrs interpreter.
"""
