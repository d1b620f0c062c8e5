"""
Approval core for purchase orders.

Pure functions over OrderSnapshot / ApprovalSlot / Actor values:
- required_levels: amount -> admin levels that must sign off
- can_decide: may this actor decide on this order
- create_plan / apply_decision: the approval state machine
- status_message: display text for the current state
"""

from .snapshots import (
    Actor,
    ApprovalBreakdown,
    ApprovalSlot,
    DecisionResult,
    OrderSnapshot,
)
from .thresholds import (
    LEVEL_1_THRESHOLD,
    LEVEL_2_THRESHOLD,
    LEVEL_3_THRESHOLD,
    approval_chain,
    required_levels,
)
from .authorization import can_decide
from .workflow import (
    apply_decision,
    approval_breakdown,
    create_plan,
    is_fully_approved,
)
from .status import status_message

__all__ = [
    # Snapshots
    'Actor',
    'ApprovalBreakdown',
    'ApprovalSlot',
    'DecisionResult',
    'OrderSnapshot',

    # Thresholds
    'LEVEL_1_THRESHOLD',
    'LEVEL_2_THRESHOLD',
    'LEVEL_3_THRESHOLD',
    'approval_chain',
    'required_levels',

    # Authorization
    'can_decide',

    # Workflow
    'apply_decision',
    'approval_breakdown',
    'create_plan',
    'is_fully_approved',

    # Status
    'status_message',
]
