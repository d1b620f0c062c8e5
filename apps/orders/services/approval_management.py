"""
Approval decision service.

Runs the approval state machine against a locked snapshot of an order and
its slots. Both rows are locked with select_for_update for the whole
read-compute-write sequence, so two admins deciding the same order
concurrently are serialized and never compute the next status from
stale data.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.orders.approval import apply_decision, approval_breakdown, status_message
from apps.orders.choices import ApprovalDecision, ApprovalStatus
from apps.orders.exceptions import ApprovalError, OrderNotFoundError
from apps.orders.models import Order

from .order_management import get_order_by_id

logger = logging.getLogger(__name__)


@transaction.atomic
def submit_decision(
    *,
    order_id: UUID,
    approver: User,
    decision: str,
    comments: str = ''
) -> Order:
    """
    Approve or reject an order at the approver's own admin level.

    Args:
        order_id: UUID of the order
        approver: Admin submitting the decision
        decision: 'approved' or 'rejected'
        comments: Optional comments stored on the approval slot

    Returns:
        Updated Order instance with approvals loaded

    Raises:
        OrderNotFoundError: If order doesn't exist
        InvalidLevelError: If the order has no slot at the approver's level
        AlreadyDecidedError: If that slot was already decided
        OrderFinalizedError: If the order is already rejected or approved
        UnauthorizedDecisionError: If the approver may not decide this order
        ApprovalInvariantError: If stored slots don't match required levels
    """
    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    approvals = list(order.approvals.select_for_update().order_by('admin_level'))

    try:
        result = apply_decision(
            order.to_snapshot(),
            [approval.to_slot() for approval in approvals],
            approver.to_actor(),
            decision,
            comments,
        )
    except ApprovalError as e:
        logger.warning(
            "Decision on order %s by %s refused: %s",
            order.order_number, approver.email, e
        )
        raise

    approval = next(a for a in approvals if a.admin_level == result.slot.level)
    approval.apply_slot(result.slot)
    approval.save(update_fields=['decision', 'approved_by', 'comments', 'decided_at'])

    order.apply_snapshot(result.order)
    order.save(update_fields=['status', 'approval_status', 'approved_at'])

    if result.slot.decision == ApprovalDecision.REJECTED:
        logger.info(
            "Order %s rejected at level %s by %s",
            order.order_number, result.slot.level, approver.email
        )
    elif result.order.approval_status == ApprovalStatus.FINALLY_APPROVED:
        logger.info(
            "Order %s fully approved (final level %s by %s)",
            order.order_number, result.slot.level, approver.email
        )
    else:
        logger.info(
            "Order %s approved at level %s by %s, now %s",
            order.order_number, result.slot.level, approver.email,
            result.order.approval_status.label
        )

    return get_order_by_id(order_id=order.id)


def get_approval_status(*, order_id: UUID) -> dict:
    """
    Summarize where an order stands in the approval workflow.

    Returns:
        Dict with order_id, status, message, required_levels,
        approved_levels and pending_levels

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    order = get_order_by_id(order_id=order_id)
    snapshot = order.to_snapshot()
    slots = [approval.to_slot() for approval in order.approvals.all()]
    breakdown = approval_breakdown(snapshot, slots)

    return {
        'order_id': order.id,
        'status': order.approval_status,
        'message': status_message(snapshot, slots),
        'required_levels': breakdown.required,
        'approved_levels': breakdown.approved,
        'pending_levels': breakdown.pending,
    }
