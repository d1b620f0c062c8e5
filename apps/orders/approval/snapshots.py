"""Immutable snapshots of an order, its approval slots and the deciding actor."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from apps.accounts.choices import UserRole
from apps.orders.choices import ApprovalDecision, ApprovalStatus, OrderStatus


@dataclass(frozen=True)
class OrderSnapshot:
    id: Any
    amount: Decimal
    status: OrderStatus = OrderStatus.PENDING
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    created_by_id: Any = None


@dataclass(frozen=True)
class ApprovalSlot:
    order_id: Any
    level: int
    decision: ApprovalDecision = ApprovalDecision.PENDING
    approver_id: Any = None
    comments: str = ''
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.decision == ApprovalDecision.PENDING


@dataclass(frozen=True)
class Actor:
    id: Any
    role: UserRole = UserRole.STANDARD
    admin_level: Optional[int] = None


@dataclass(frozen=True)
class DecisionResult:
    """Updated order and the slot that was decided; persist both together."""

    order: OrderSnapshot
    slot: ApprovalSlot


@dataclass(frozen=True)
class ApprovalBreakdown:
    required: list[int]
    approved: list[int]
    pending: list[int]
