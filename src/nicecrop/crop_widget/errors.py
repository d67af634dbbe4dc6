"""Exceptions raised by the crop geometry core."""

from __future__ import annotations


class CropError(Exception):
    """Base class for nicecrop errors."""


class PreconditionViolation(CropError):
    """A call was made that the current session state or inputs do not allow.

    Raised for interactive calls before the image has loaded or after the
    session was destroyed, for non-finite or negative numeric inputs, and for
    rotations that are not a multiple of 90 degrees. Never retried.
    """
