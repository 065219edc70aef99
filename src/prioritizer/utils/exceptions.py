#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides custom exception types."""


class ConfigurationException(Exception):
    """An exception type that's raised if the prioritizer has no proper configuration."""


class InvalidArgumentError(ValueError):
    """Raised if an argument violates the contract of an operation.

    This covers, e.g., mismatched coverage matrix and ordering lengths, negative
    search budgets, malformed manual orderings, or unknown algorithm names.
    """


class DegenerateInputError(ValueError):
    """Raised if the input does not allow a meaningful computation.

    The APLC metric is undefined for a coverage matrix without any code unit that is
    covered by at least one test case.
    """


class MissingCollaboratorError(ValueError):
    """Raised if a search algorithm is constructed without one of its collaborators."""

    def __init__(self, role: str) -> None:
        """Create a new missing collaborator error.

        Args:
            role: The name of the missing role, e.g., ``"stopping condition"``
        """
        super().__init__(f"A search algorithm requires a {role}, but None was given.")
        self.role = role


class CoverageAcquisitionError(Exception):
    """Raised if a coverage matrix could not be acquired."""
