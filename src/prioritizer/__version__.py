#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the version of the prioritizer."""

__version__ = "0.1.0"
