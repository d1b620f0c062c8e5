"""
Orders app services layer.

Services load and persist orders; the approval rules themselves live in
apps.orders.approval and never touch the database.
"""

from apps.orders.exceptions import (
    OrdersServiceError,
    OrderNotFoundError,
    DuplicateOrderNumberError,
    OrderNotDeletableError,
    ApprovalError,
    InvalidLevelError,
    AlreadyDecidedError,
    OrderFinalizedError,
    UnauthorizedDecisionError,
    ApprovalInvariantError,
)

from .order_management import (
    create_order,
    get_order_by_id,
    list_orders,
    update_order,
    delete_order,
)

from .approval_management import (
    submit_decision,
    get_approval_status,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'OrderNotFoundError',
    'DuplicateOrderNumberError',
    'OrderNotDeletableError',
    'ApprovalError',
    'InvalidLevelError',
    'AlreadyDecidedError',
    'OrderFinalizedError',
    'UnauthorizedDecisionError',
    'ApprovalInvariantError',

    # Order Management
    'create_order',
    'get_order_by_id',
    'list_orders',
    'update_order',
    'delete_order',

    # Approval Management
    'submit_decision',
    'get_approval_status',
]
