"""Utilities for exact inventory checks and consumption.

Balances are ``Decimal`` quantities. Floats are converted through their
string form so ``0.1`` stays ``Decimal("0.1")`` instead of picking up
binary rounding noise over many small transactions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Mapping, Union

from zombie_farm.exceptions import InsufficientResourceError

Quantity = Union[Decimal, int, float, str]


def to_decimal(value: Quantity) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def balance(inventory: Mapping[str, Decimal], resource: str) -> Decimal:
    """Current balance of ``resource``; missing entries count as zero."""
    return to_decimal(inventory.get(resource, Decimal(0)))


def ensure_available(inventory: Mapping[str, Decimal], costs: Mapping[str, Quantity]) -> None:
    """Raise if any cost is not covered.

    Resources are checked in name order so the reported shortage is stable.

    Raises:
        InsufficientResourceError: for the first resource that falls short
    """
    for resource in sorted(costs):
        required = to_decimal(costs[resource])
        available = balance(inventory, resource)
        if available < required:
            raise InsufficientResourceError(resource, required, available)


def can_afford(inventory: Mapping[str, Decimal], costs: Mapping[str, Quantity]) -> bool:
    try:
        ensure_available(inventory, costs)
    except InsufficientResourceError:
        return False
    return True


def consume(
    inventory: Mapping[str, Decimal], costs: Mapping[str, Quantity]
) -> Dict[str, Decimal]:
    """Return a new inventory with ``costs`` deducted.

    All costs are validated before anything is deducted, so a shortage in one
    resource never leaves another partially consumed.

    Raises:
        InsufficientResourceError: if any cost is not covered
    """
    ensure_available(inventory, costs)
    updated = {name: to_decimal(amount) for name, amount in inventory.items()}
    for resource, amount in costs.items():
        updated[resource] = balance(updated, resource) - to_decimal(amount)
    return updated


def add_costs(
    total: Mapping[str, Decimal], costs: Mapping[str, Quantity]
) -> Dict[str, Decimal]:
    """Accumulate ``costs`` into a running total (used for batch summaries)."""
    combined = dict(total)
    for resource, amount in costs.items():
        combined[resource] = combined.get(resource, Decimal(0)) + to_decimal(amount)
    return combined
