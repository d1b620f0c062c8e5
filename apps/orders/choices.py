"""
Status choices shared by the order models and the approval core.

Kept apart from models.py so the approval core can use them without
touching the ORM.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    CANCELLED = 'cancelled', 'Cancelled'


class ApprovalDecision(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class ApprovalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    AWAITING_LEVEL_1 = 'awaiting_level_1', 'Awaiting Level 1'
    AWAITING_LEVEL_2 = 'awaiting_level_2', 'Awaiting Level 2'
    AWAITING_LEVEL_3 = 'awaiting_level_3', 'Awaiting Level 3'
    FINALLY_APPROVED = 'finally_approved', 'Finally Approved'
    REJECTED = 'rejected', 'Rejected'

    @classmethod
    def awaiting(cls, level):
        """Return the awaiting status for an admin level (1-3)."""
        try:
            return _AWAITING_BY_LEVEL[level]
        except KeyError:
            raise ValueError(f"No awaiting status for level {level!r}")

    @property
    def awaiting_level(self):
        """Admin level this status waits on, or None."""
        return _LEVEL_BY_AWAITING.get(self)

    @property
    def is_terminal(self):
        return self in (ApprovalStatus.FINALLY_APPROVED, ApprovalStatus.REJECTED)


_AWAITING_BY_LEVEL = {
    1: ApprovalStatus.AWAITING_LEVEL_1,
    2: ApprovalStatus.AWAITING_LEVEL_2,
    3: ApprovalStatus.AWAITING_LEVEL_3,
}
_LEVEL_BY_AWAITING = {status: level for level, status in _AWAITING_BY_LEVEL.items()}
