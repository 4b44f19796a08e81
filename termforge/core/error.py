# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge error taxonomy.

Every error raised by the engine derives from ``TermForgeError`` and carries
the numeric error code plus the name of the operation that raised it. Errors
are raised synchronously at the call that violates an invariant and are never
retried or recovered internally.
"""

from __future__ import annotations

# error types
CLOSEDPATH = 0
OUTOFBOUNDS = 1
INVALIDARGUMENT = 2
SCRIPTERROR = 3

ERROR_NAMES = {
    CLOSEDPATH: "closedpath",
    OUTOFBOUNDS: "outofbounds",
    INVALIDARGUMENT: "invalidargument",
    SCRIPTERROR: "scripterror",
}


class TermForgeError(Exception):
    """Base class for all TermForge errors."""

    code = -1

    def __init__(self, message: str, func_name: str | None = None) -> None:
        super().__init__(message)
        self.func_name = func_name

    @property
    def error_name(self) -> str:
        return ERROR_NAMES.get(self.code, f"error#{self.code}")


class ClosedPathError(TermForgeError):
    """An operation was appended to, or close() called on, a closed path."""

    code = CLOSEDPATH


class OutOfBoundsError(TermForgeError):
    """A point lies outside the addressable lattice of the output surface."""

    code = OUTOFBOUNDS


class InvalidArgumentError(TermForgeError, ValueError):
    """A malformed point-like, size, radius or color argument."""

    code = INVALIDARGUMENT


class ScriptError(TermForgeError):
    """A drawing script could not be tokenized or executed."""

    code = SCRIPTERROR

    def __init__(self, message: str, func_name: str | None = None,
                 line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message, func_name)
        self.line = line


_ERROR_CLASSES = {
    CLOSEDPATH: ClosedPathError,
    OUTOFBOUNDS: OutOfBoundsError,
    INVALIDARGUMENT: InvalidArgumentError,
    SCRIPTERROR: ScriptError,
}


def e(error_code: int, func_name: str, detail: str = "") -> None:
    """Raise the error mapped to ``error_code`` on behalf of ``func_name``.

    Callers use ``return tf_error.e(...)`` so the point of failure reads the
    same as every other early exit in an operator.
    """
    if func_name.startswith("tf_"):
        func_name = func_name[3:]

    error_class = _ERROR_CLASSES.get(error_code, TermForgeError)
    error_name = ERROR_NAMES.get(error_code, f"error#{error_code}")
    message = f"/{error_name} in --{func_name}--"
    if detail:
        message += f": {detail}"
    raise error_class(message, func_name)
