"""Zombie farm exception hierarchy.

Every failure a transition can report is a subclass of ``FarmError`` so hosts
can catch the whole family, or a single kind, without resorting to bare
``except Exception`` blocks. All of them are raised before any new snapshot
is built, so a caught error always means "nothing changed".
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional


class FarmError(Exception):
    """Root of all zombie-farm domain exceptions."""


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class NotFoundError(FarmError):
    """A plot or zombie referenced by id does not exist."""


class PlotNotFoundError(NotFoundError):
    def __init__(self, plot_id: str) -> None:
        super().__init__(f"Plot {plot_id} does not exist")
        self.plot_id = plot_id


class ZombieNotFoundError(NotFoundError):
    def __init__(self, zombie_id: str) -> None:
        super().__init__(f"Zombie {zombie_id} does not exist")
        self.zombie_id = zombie_id


# ---------------------------------------------------------------------------
# State checks
# ---------------------------------------------------------------------------


class InvalidStateError(FarmError):
    """The target is in the wrong occupancy, stage or containment state."""


class PlotNotPlacedError(InvalidStateError):
    def __init__(self, plot_id: str) -> None:
        super().__init__(f"Plot {plot_id} must be placed on the map first")
        self.plot_id = plot_id


class PlotOccupiedError(InvalidStateError):
    def __init__(self, plot_id: str) -> None:
        super().__init__(f"A zombie is already growing in plot {plot_id}")
        self.plot_id = plot_id


class PlotEmptyError(InvalidStateError):
    def __init__(self, plot_id: str) -> None:
        super().__init__(f"No zombie to raise in plot {plot_id}")
        self.plot_id = plot_id


class NotReadyError(InvalidStateError):
    """Raised when a growing zombie has not reached READY_TO_HARVEST."""

    def __init__(self, plot_id: str, stage: object) -> None:
        super().__init__(f"Zombie in plot {plot_id} is not ready to raise yet (stage={stage})")
        self.plot_id = plot_id
        self.stage = stage


class ZombieContainedError(InvalidStateError):
    def __init__(self, zombie_id: str, action: str) -> None:
        super().__init__(f"Cannot {action} zombie {zombie_id} while it is contained")
        self.zombie_id = zombie_id
        self.action = action


class DuplicateZombieError(InvalidStateError):
    def __init__(self, zombie_id: str) -> None:
        super().__init__(f"Zombie {zombie_id} has already been raised")
        self.zombie_id = zombie_id


# ---------------------------------------------------------------------------
# Resources and timing
# ---------------------------------------------------------------------------


class InsufficientResourceError(FarmError):
    """The inventory cannot cover a cost. Nothing was consumed."""

    def __init__(self, resource: str, required: Decimal, available: Decimal) -> None:
        super().__init__(
            f"Insufficient {resource}: required {required}, available {available}"
        )
        self.resource = resource
        self.required = required
        self.available = available


class OnCooldownError(FarmError):
    """An action was attempted before its cooldown elapsed."""

    def __init__(self, zombie_id: str, action: str, remaining: float) -> None:
        super().__init__(
            f"Cannot {action} zombie {zombie_id} yet: {remaining:.0f}s of cooldown remaining"
        )
        self.zombie_id = zombie_id
        self.action = action
        self.remaining = remaining


# ---------------------------------------------------------------------------
# Configuration and input
# ---------------------------------------------------------------------------


class ConfigurationError(FarmError):
    """Invalid or missing configuration."""


class UnknownTypeError(ConfigurationError):
    def __init__(self, kind: object, detail: Optional[str] = None) -> None:
        message = f"No configuration for {kind!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.kind = kind


class UnknownResourceError(ConfigurationError):
    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} is not a valid zombie seed")
        self.resource = resource


class InvalidActionError(FarmError):
    """An action payload failed validation."""
