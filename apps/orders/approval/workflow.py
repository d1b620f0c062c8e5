"""
Approval state machine.

Works on immutable snapshots only: callers load an order and its slots,
call into this module, and persist whatever comes back in one transaction.
Nothing here reads or writes the database.
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from django.utils import timezone

from apps.orders.choices import ApprovalDecision, ApprovalStatus, OrderStatus
from apps.orders.exceptions import (
    AlreadyDecidedError,
    ApprovalInvariantError,
    InvalidLevelError,
    OrderFinalizedError,
    UnauthorizedDecisionError,
)

from .authorization import can_decide
from .snapshots import Actor, ApprovalBreakdown, ApprovalSlot, DecisionResult, OrderSnapshot
from .thresholds import approval_chain, required_levels


def create_plan(
    order: OrderSnapshot,
    *,
    now: Optional[datetime] = None
) -> tuple[OrderSnapshot, list[ApprovalSlot]]:
    """
    Build the approval plan for a newly submitted order.

    Creates one pending slot per required level and moves the order to
    awaiting the first required level (always level 1).

    Args:
        order: Snapshot of the order being created
        now: Timestamp for the new slots (defaults to timezone.now())

    Returns:
        Tuple of (updated order snapshot, list of pending slots)
    """
    now = now or timezone.now()
    levels = approval_chain(order.amount)

    slots = [
        ApprovalSlot(
            order_id=order.id,
            level=level,
            decision=ApprovalDecision.PENDING,
            created_at=now,
        )
        for level in levels
    ]
    planned = replace(
        order,
        status=OrderStatus.PENDING,
        approval_status=ApprovalStatus.awaiting(levels[0]),
    )
    return planned, slots


def _check_slots(order: OrderSnapshot, slots: list[ApprovalSlot]) -> None:
    levels = [slot.level for slot in slots]
    if sorted(levels) != required_levels(order.amount):
        raise ApprovalInvariantError(
            f"Order {order.id} has approval slots for levels {sorted(levels)}, "
            f"expected {required_levels(order.amount)}"
        )


def _approved_levels(slots: Iterable[ApprovalSlot]) -> set[int]:
    return {slot.level for slot in slots if slot.decision == ApprovalDecision.APPROVED}


def apply_decision(
    order: OrderSnapshot,
    slots: list[ApprovalSlot],
    actor: Actor,
    decision: ApprovalDecision,
    comments: str = '',
    *,
    now: Optional[datetime] = None
) -> DecisionResult:
    """
    Apply an admin's decision to the slot matching the admin's own level.

    Validation runs in full before anything is built, so a failed call
    leaves the caller's snapshots untouched.

    Args:
        order: Current order snapshot
        slots: All approval slots of the order
        actor: Admin submitting the decision
        decision: ApprovalDecision.APPROVED or ApprovalDecision.REJECTED
        comments: Free-text comments stored on the slot
        now: Decision timestamp (defaults to timezone.now())

    Returns:
        DecisionResult with the updated order and the decided slot

    Raises:
        ApprovalInvariantError: If slots don't match the required levels
        ValueError: If decision is not approved/rejected
        InvalidLevelError: If no slot exists at the actor's level
        AlreadyDecidedError: If that slot has already been decided
        OrderFinalizedError: If the slot is pending but the order is already
            rejected or fully approved
        UnauthorizedDecisionError: If the actor may not decide this order
    """
    _check_slots(order, slots)

    decision = ApprovalDecision(decision)
    if decision == ApprovalDecision.PENDING:
        raise ValueError("Decision must be 'approved' or 'rejected'")

    slot = next((s for s in slots if s.level == actor.admin_level), None)
    if slot is None:
        raise InvalidLevelError(actor.admin_level)

    if not slot.is_pending:
        raise AlreadyDecidedError(slot.decision)

    # Actor's own slot is still pending but the order is already closed.
    if order.approval_status == ApprovalStatus.REJECTED:
        raise OrderFinalizedError(ApprovalDecision.REJECTED)
    if order.approval_status == ApprovalStatus.FINALLY_APPROVED:
        raise OrderFinalizedError(ApprovalDecision.APPROVED)

    if not can_decide(order, actor):
        raise UnauthorizedDecisionError("User is not authorized to approve this order")

    now = now or timezone.now()
    decided = replace(
        slot,
        decision=decision,
        approver_id=actor.id,
        comments=comments,
        decided_at=now,
    )

    if decision == ApprovalDecision.REJECTED:
        rejected = replace(
            order,
            approval_status=ApprovalStatus.REJECTED,
            status=OrderStatus.REJECTED,
        )
        return DecisionResult(order=rejected, slot=decided)

    current = [decided if s is slot else s for s in slots]

    if is_fully_approved(order, current):
        updated = replace(
            order,
            approval_status=ApprovalStatus.FINALLY_APPROVED,
            status=OrderStatus.APPROVED,
            approved_at=now,
        )
    else:
        # Smallest unapproved level, even if a higher level approved first.
        approved = _approved_levels(current)
        next_level = next(level for level in approval_chain(order.amount) if level not in approved)
        updated = replace(order, approval_status=ApprovalStatus.awaiting(next_level))

    return DecisionResult(order=updated, slot=decided)


def is_fully_approved(order: OrderSnapshot, slots: list[ApprovalSlot]) -> bool:
    if order.approval_status == ApprovalStatus.FINALLY_APPROVED:
        return True
    return _approved_levels(slots) == set(required_levels(order.amount))


def approval_breakdown(order: OrderSnapshot, slots: list[ApprovalSlot]) -> ApprovalBreakdown:
    """Required, approved and still-pending levels of an order, ascending."""
    required = required_levels(order.amount)
    approved = sorted(_approved_levels(slots))
    pending = [level for level in required if level not in approved]
    return ApprovalBreakdown(required=required, approved=approved, pending=pending)
