# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class NewtsError(Exception):
    """Base class for all exceptions raised by Newts."""

    def __str__(self) -> str:
        """Return the string representation of the exception with the class name."""
        return super().__str__()


class InvalidArgumentError(NewtsError, ValueError):
    """Exception raised when a required argument is missing or out of range."""


class ValueTypeError(NewtsError, TypeError):
    """Exception raised when two value kinds cannot be combined."""

    def __init__(self, operation: str, left: object, right: object) -> None:
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(
            f"Unsupported operand kinds for {operation}: "
            f"{type(left).__name__} and {type(right).__name__}"
        )


class ConfigurationError(NewtsError):
    """Exception raised when something fails to configure, or there is a configuration error."""
