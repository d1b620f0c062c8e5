from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.accounts.choices import AdminLevel
from .approval import ApprovalSlot, OrderSnapshot
from .choices import ApprovalDecision, ApprovalStatus, OrderStatus


class Order(models.Model):
    """Purchase order awaiting multi-level approval."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=50, unique=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='created_orders'
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    description = models.CharField(max_length=500, blank=True)

    # Lifecycle and approval state (approval_status is derived from the
    # approval slots and stored for display)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True
    )
    approval_status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING,
        db_index=True
    )

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_by', '-created_at'], name='orders_created_7a2e41_idx'),
        ]

    def __str__(self):
        return f"{self.order_number} ({self.amount})"

    def to_snapshot(self):
        return OrderSnapshot(
            id=self.id,
            amount=self.amount,
            status=OrderStatus(self.status),
            approval_status=ApprovalStatus(self.approval_status),
            created_at=self.created_at,
            approved_at=self.approved_at,
            created_by_id=self.created_by_id,
        )

    def apply_snapshot(self, snapshot):
        """Copy workflow-owned fields back from a snapshot."""
        self.status = snapshot.status
        self.approval_status = snapshot.approval_status
        self.approved_at = snapshot.approved_at


class OrderApproval(models.Model):
    """One approval slot per required admin level of an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='approvals'
    )
    approved_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_approvals'
    )

    admin_level = models.PositiveSmallIntegerField(choices=AdminLevel.choices)
    decision = models.CharField(
        max_length=20,
        choices=ApprovalDecision.choices,
        default=ApprovalDecision.PENDING
    )
    comments = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    decided_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'order_approvals'
        ordering = ['admin_level']
        constraints = [
            models.UniqueConstraint(
                fields=['order', 'admin_level'],
                name='unique_order_admin_level'
            ),
        ]

    def __str__(self):
        return f"{self.order.order_number} - Level {self.admin_level}: {self.decision}"

    @classmethod
    def from_slot(cls, order, slot):
        return cls(
            order=order,
            admin_level=slot.level,
            decision=slot.decision,
            approved_by_id=slot.approver_id,
            comments=slot.comments,
            created_at=slot.created_at,
            decided_at=slot.decided_at,
        )

    def to_slot(self):
        return ApprovalSlot(
            order_id=self.order_id,
            level=self.admin_level,
            decision=ApprovalDecision(self.decision),
            approver_id=self.approved_by_id,
            comments=self.comments,
            created_at=self.created_at,
            decided_at=self.decided_at,
        )

    def apply_slot(self, slot):
        self.decision = slot.decision
        self.approved_by_id = slot.approver_id
        self.comments = slot.comments
        self.decided_at = slot.decided_at
