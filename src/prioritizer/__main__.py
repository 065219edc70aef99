#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Prioritizer orders the test cases of a test suite by their code coverage.

This module provides the main entry location for the program executions.
"""

import sys

from prioritizer.cli import main


if __name__ == "__main__":
    sys.exit(main(sys.argv))
