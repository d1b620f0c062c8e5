"""
Domain exceptions for the orders app.

The approval core and the persistence services both raise these; views
translate them into HTTP responses.
"""


class OrdersServiceError(Exception):
    """Base exception for orders service errors."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Order does not exist."""
    pass


class DuplicateOrderNumberError(OrdersServiceError):
    """An order with this order number already exists."""
    pass


class OrderNotDeletableError(OrdersServiceError):
    """Order has left the initial pending state and cannot be deleted."""
    pass


class ApprovalError(OrdersServiceError):
    """Base exception for rejected approval decisions."""
    pass


class InvalidLevelError(ApprovalError):
    """No approval slot exists for the actor's admin level on this order."""

    def __init__(self, level):
        self.level = level
        if level is None:
            message = "Approver has no admin level assigned"
        else:
            message = f"Invalid approval level for this order: Level {level}"
        super().__init__(message)


class AlreadyDecidedError(ApprovalError):
    """Approval slot already carries a terminal decision."""

    def __init__(self, decision, message=None):
        self.decision = decision
        super().__init__(
            message or f"This approval level has already been decided: {decision.label}"
        )


class OrderFinalizedError(AlreadyDecidedError):
    """Order is already rejected or fully approved; no further decisions apply."""

    def __init__(self, decision):
        super().__init__(decision, f"Order has already been {decision.label.lower()}")


class UnauthorizedDecisionError(ApprovalError):
    """Actor is not an admin whose level is required for this order."""
    pass


class ApprovalInvariantError(RuntimeError):
    """
    Persisted approval slots do not match the order's required levels.

    This is a data integrity failure, not a business error, and is never
    translated into a client response.
    """
    pass
