from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Message:
    """A ceremony request: the typed inputs of one device operation."""


@dataclass
class Result:
    """Decoded output of a device operation that succeeded.

    Failures never produce a Result; they are raised as SecureElementError.
    """
