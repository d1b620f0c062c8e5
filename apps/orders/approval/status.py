"""Human-readable approval status messages."""

from apps.orders.choices import ApprovalStatus

from .snapshots import ApprovalSlot, OrderSnapshot
from .workflow import approval_breakdown


def status_message(order: OrderSnapshot, slots: list[ApprovalSlot]) -> str:
    if order.approval_status == ApprovalStatus.FINALLY_APPROVED:
        return "Order is fully approved"

    if order.approval_status == ApprovalStatus.REJECTED:
        return "Order has been rejected"

    pending = approval_breakdown(order, slots).pending
    if pending:
        levels = ", ".join(f"Level {level}" for level in pending)
        return f"Awaiting approval from: {levels}"

    return "Pending approval"
