"""Cell variants and their survival rules.

The variant set is closed: ``RULES`` maps every ``CellVariant`` to its
rule and the table is checked for completeness at import time.

| Variant     | Dies if          | Revives if |
|-------------|------------------|------------|
| standard    | n < 2 or n > 3   | n == 3     |
| territorial | n < 1 or n > 3   | n == 3     |
| gregarious  | n < 2 or n > 8   | n == 3     |
| resilient   | standard, with up to three consecutive reprieves  |
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from extlife.life.cell import Cell

RESILIENT_GRACE_TICKS = 3


class CellVariant(Enum):
    """Behavioural variant selecting the survival rule."""

    STANDARD = "standard"
    TERRITORIAL = "territorial"
    GREGARIOUS = "gregarious"
    RESILIENT = "resilient"


Rule = Callable[["Cell", int], bool]


def _threshold_rule(cell: Cell, alive_neighbours: int, low: int, high: int) -> bool:
    """Die outside ``[low, high]``, revive on exactly three, else unchanged."""
    if alive_neighbours > high or alive_neighbours < low:
        return False
    if not cell.alive and alive_neighbours == 3:
        return True
    return cell.alive


def standard_rule(cell: Cell, alive_neighbours: int) -> bool:
    return _threshold_rule(cell, alive_neighbours, low=2, high=3)


def territorial_rule(cell: Cell, alive_neighbours: int) -> bool:
    return _threshold_rule(cell, alive_neighbours, low=1, high=3)


def gregarious_rule(cell: Cell, alive_neighbours: int) -> bool:
    return _threshold_rule(cell, alive_neighbours, low=2, high=8)


def resilient_rule(cell: Cell, alive_neighbours: int) -> bool:
    """Standard rule, but a living cell shrugs off three deaths in a row.

    A standard "lives" verdict resets the grace counter.  Once the counter
    is spent the cell dies and stays at the limit until it revives.
    """
    if standard_rule(cell, alive_neighbours):
        cell.grace = 0
        return True
    if cell.alive and cell.grace < RESILIENT_GRACE_TICKS:
        cell.grace += 1
        return True
    return False


RULES: dict[CellVariant, Rule] = {
    CellVariant.STANDARD: standard_rule,
    CellVariant.TERRITORIAL: territorial_rule,
    CellVariant.GREGARIOUS: gregarious_rule,
    CellVariant.RESILIENT: resilient_rule,
}

# Variants that keep their own energy ledger on top of the policy table.
ENERGY_TRACKING: frozenset[CellVariant] = frozenset(
    {CellVariant.TERRITORIAL, CellVariant.GREGARIOUS},
)

_missing = set(CellVariant) - RULES.keys()
if _missing:
    msg = f"No survival rule for variants: {sorted(v.value for v in _missing)}"
    raise RuntimeError(msg)


def survival_rule(variant: CellVariant) -> Rule:
    """Return the survival rule for ``variant``."""
    return RULES[variant]


def tracked_energy(variant: CellVariant, energy: int, was_alive: bool, next_alive: bool) -> int:
    """Apply a variant's own energy bookkeeping for one tick.

    Territorial and gregarious cells gain 1 while they stay alive, lose 1
    on the tick they die, and restart from 0 when they revive.  Other
    variants return ``energy`` unchanged.
    """
    if variant not in ENERGY_TRACKING:
        return energy
    if was_alive:
        return energy + 1 if next_alive else energy - 1
    if next_alive:
        return 0
    return energy
