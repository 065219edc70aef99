#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Prioritizer orders the test cases of a test suite by their code coverage."""

import prioritizer.configuration as config
import prioritizer.generator as gen


set_configuration = gen.set_configuration
run_prioritizer = gen.run_prioritizer
Configuration = config.Configuration
Algorithm = config.Algorithm
ReturnCode = gen.ReturnCode

__all__ = [
    "Algorithm",
    "Configuration",
    "ReturnCode",
    "run_prioritizer",
    "set_configuration",
]
