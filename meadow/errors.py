"""Errors surfaced to callers during setup.

Steady-state outcomes (energy or food running out, a colony dying) are
state transitions, never exceptions.
"""

from __future__ import annotations


class SetupError(ValueError):
    """Raised when a world, colony, or entity is configured incorrectly."""
