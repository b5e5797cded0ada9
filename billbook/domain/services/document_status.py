# billbook/domain/services/document_status.py
"""
Payment status lifecycle for invoices and purchase bills.

    unpaid <-> paid      explicit user toggle
    unpaid  -> overdue   external time-based process only

A paid document never becomes overdue and an overdue one cannot be toggled.
"""

from __future__ import annotations

from billbook.domain.models.documents import DocumentStatus

_ALLOWED: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.UNPAID: frozenset({DocumentStatus.PAID, DocumentStatus.OVERDUE}),
    DocumentStatus.PAID: frozenset({DocumentStatus.UNPAID}),
    DocumentStatus.OVERDUE: frozenset(),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, current: DocumentStatus, target: DocumentStatus):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move a {current.value} document to {target.value}")


def can_transition(current: DocumentStatus, target: DocumentStatus) -> bool:
    return target in _ALLOWED[current]


def transition(current: DocumentStatus, target: DocumentStatus) -> DocumentStatus:
    if not can_transition(current, target):
        raise InvalidStatusTransition(current, target)
    return target


def toggle_paid(current: DocumentStatus) -> DocumentStatus:
    """paid -> unpaid, unpaid -> paid."""
    target = DocumentStatus.UNPAID if current is DocumentStatus.PAID else DocumentStatus.PAID
    return transition(current, target)


def mark_overdue(current: DocumentStatus) -> DocumentStatus:
    return transition(current, DocumentStatus.OVERDUE)
