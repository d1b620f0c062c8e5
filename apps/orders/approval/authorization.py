"""Decides whether an actor may submit an approval decision on an order."""

from apps.accounts.choices import UserRole

from .snapshots import Actor, OrderSnapshot
from .thresholds import required_levels


def can_decide(order: OrderSnapshot, actor: Actor) -> bool:
    """
    Check that the actor is an admin whose level is required for the order.

    Only level membership is checked. An admin whose level is required may
    decide even while a lower level is still pending.
    """
    if actor.role != UserRole.ADMIN or actor.admin_level is None:
        return False

    return actor.admin_level in required_levels(order.amount)
