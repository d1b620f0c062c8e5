"""
Order management service.

Creates orders together with their approval slots and handles the few
edits allowed on an order outside the approval workflow.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.orders.approval import OrderSnapshot, create_plan
from apps.orders.choices import ApprovalDecision, ApprovalStatus, OrderStatus
from apps.orders.exceptions import (
    DuplicateOrderNumberError,
    OrderNotDeletableError,
    OrderNotFoundError,
)
from apps.orders.models import Order, OrderApproval

logger = logging.getLogger(__name__)


@transaction.atomic
def create_order(
    *,
    created_by: User,
    order_number: str,
    amount: Decimal,
    description: str = ''
) -> Order:
    """
    Create an order and one pending approval slot per required level.

    The order row and all of its slots are written in one transaction.

    Args:
        created_by: User submitting the order
        order_number: Unique business identifier
        amount: Order amount; decides the required approval levels
        description: Free-text description

    Returns:
        Created Order instance with approvals prefetched

    Raises:
        DuplicateOrderNumberError: If order_number is already used
    """
    if Order.objects.filter(order_number=order_number).exists():
        raise DuplicateOrderNumberError(f"Order number {order_number} already exists")

    now = timezone.now()
    draft = OrderSnapshot(
        id=None,
        amount=amount,
        status=OrderStatus.PENDING,
        approval_status=ApprovalStatus.PENDING,
        created_at=now,
        created_by_id=created_by.id,
    )
    planned, slots = create_plan(draft, now=now)

    order = Order.objects.create(
        order_number=order_number,
        created_by=created_by,
        amount=amount,
        description=description,
        status=planned.status,
        approval_status=planned.approval_status,
        created_at=now,
    )
    OrderApproval.objects.bulk_create(
        [OrderApproval.from_slot(order, slot) for slot in slots]
    )

    logger.info(
        "Order %s created by %s for %s, required levels %s",
        order.order_number, created_by.email, amount, [slot.level for slot in slots]
    )
    return get_order_by_id(order_id=order.id)


def get_order_by_id(*, order_id: UUID) -> Order:
    """
    Get an order with its creator and approvals loaded.

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        return (
            Order.objects
            .select_related('created_by')
            .prefetch_related('approvals__approved_by')
            .get(id=order_id)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


def list_orders(
    *,
    created_by: Optional[User] = None,
    status: Optional[str] = None,
    approval_status: Optional[str] = None
) -> QuerySet[Order]:
    """List orders, optionally filtered by creator, status or approval status."""
    queryset = (
        Order.objects
        .select_related('created_by')
        .prefetch_related('approvals__approved_by')
    )

    if created_by is not None:
        queryset = queryset.filter(created_by=created_by)
    if status:
        queryset = queryset.filter(status=status)
    if approval_status:
        queryset = queryset.filter(approval_status=approval_status)

    return queryset


@transaction.atomic
def update_order(*, order_id: UUID, description: str) -> Order:
    """
    Update the description of an order.

    Amount is not editable: required approval levels are fixed at creation.

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    order.description = description
    order.updated_at = timezone.now()
    order.save(update_fields=['description', 'updated_at'])

    return get_order_by_id(order_id=order.id)


@transaction.atomic
def delete_order(*, order_id: UUID) -> None:
    """
    Delete an order that has not received any decision yet.

    Raises:
        OrderNotFoundError: If order doesn't exist
        OrderNotDeletableError: If the order is no longer pending
    """
    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    has_decisions = order.approvals.exclude(decision=ApprovalDecision.PENDING).exists()
    if (
        order.status != OrderStatus.PENDING
        or ApprovalStatus(order.approval_status).is_terminal
        or has_decisions
    ):
        raise OrderNotDeletableError("Can only delete pending orders")

    order_number = order.order_number
    order.delete()
    logger.info("Order %s deleted", order_number)
