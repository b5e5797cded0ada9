# billbook/domain/services/line_items.py
"""Line-item arithmetic and the add/update/remove helpers used while editing."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Iterable, Protocol

from billbook.domain.models.documents import LineItem


class _Priced(Protocol):
    quantity: int
    unit_rate: Decimal


class LastItemError(ValueError):
    """Raised when removing the only item left on a document."""


def compute_line_total(quantity: int, unit_rate: Decimal | int) -> Decimal:
    return quantity * Decimal(unit_rate)


def compute_subtotal(items: Iterable[_Priced]) -> Decimal:
    """Sum quantity x rate over every item, zero-valued rows included."""
    return sum(
        (compute_line_total(item.quantity, item.unit_rate) for item in items),
        Decimal("0"),
    )


def new_line_item(item_id: str | None = None) -> LineItem:
    """A blank row: quantity 1, rate 0."""
    return LineItem(id=item_id or uuid.uuid4().hex, quantity=1, unit_rate=Decimal("0"))


def add_item(items: tuple[LineItem, ...], item: LineItem | None = None) -> tuple[LineItem, ...]:
    return items + (item or new_line_item(),)


def remove_item(items: tuple[LineItem, ...], item_id: str) -> tuple[LineItem, ...]:
    if len(items) <= 1:
        raise LastItemError("At least one item is required")
    return tuple(item for item in items if item.id != item_id)


def update_item(
    items: tuple[LineItem, ...],
    item_id: str,
    *,
    description: str | None = None,
    tax_code: str | None = None,
    quantity: int | None = None,
    unit_rate: Decimal | None = None,
) -> tuple[LineItem, ...]:
    """
    Return ``items`` with one row replaced.

    The replacement is a fresh LineItem, so its line total always reflects
    the new quantity and rate before any subtotal is taken.
    """
    changes = {
        key: value
        for key, value in (
            ("description", description),
            ("tax_code", tax_code),
            ("quantity", quantity),
            ("unit_rate", unit_rate),
        )
        if value is not None
    }
    updated = []
    for item in items:
        if item.id == item_id:
            item = LineItem.model_validate({**item.model_dump(exclude={"line_total"}), **changes})
        updated.append(item)
    return tuple(updated)
