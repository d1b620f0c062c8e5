from rest_framework import serializers
from decimal import Decimal

from apps.accounts.models import User
from .approval import required_levels, status_message
from .choices import ApprovalDecision, ApprovalStatus, OrderStatus
from .models import Order, OrderApproval


# =============================================================================
# Input Serializers
# =============================================================================

class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order filtering.

    Query Parameters:
        mine (bool): Only orders created by the current user
        status (str): Filter by order status
        approval_status (str): Filter by approval status
    """

    mine = serializers.BooleanField(required=False, default=False)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    approval_status = serializers.ChoiceField(choices=ApprovalStatus.choices, required=False)


class OrderCreateSerializer(serializers.Serializer):
    """Validate input for order creation."""

    order_number = serializers.CharField(max_length=50)
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00')
    )
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class OrderUpdateSerializer(serializers.Serializer):
    """Only the description can change after creation."""

    description = serializers.CharField(max_length=500, allow_blank=True)


class ApprovalDecisionInputSerializer(serializers.Serializer):
    """
    Validate input for an approval decision.

    Fields:
        decision (str): 'approved' or 'rejected'
        comments (str): Optional comments for the approval slot
    """

    decision = serializers.ChoiceField(
        choices=[
            (ApprovalDecision.APPROVED, ApprovalDecision.APPROVED.label),
            (ApprovalDecision.REJECTED, ApprovalDecision.REJECTED.label),
        ],
        default=ApprovalDecision.APPROVED
    )
    comments = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class OrderApprovalSerializer(serializers.ModelSerializer):
    """Serializer for a single approval slot."""

    approved_by = UserMinimalSerializer(read_only=True)
    approved_by_name = serializers.SerializerMethodField()

    class Meta:
        model = OrderApproval
        fields = [
            'id',
            'order',
            'admin_level',
            'decision',
            'approved_by',
            'approved_by_name',
            'comments',
            'created_at',
            'decided_at',
        ]
        read_only_fields = fields

    def get_approved_by_name(self, obj):
        if obj.approved_by:
            return obj.approved_by.get_display_name()
        return 'Pending'


class OrderSerializer(serializers.ModelSerializer):
    """Main serializer for orders, including approval slots."""

    created_by = UserMinimalSerializer(read_only=True)
    approvals = OrderApprovalSerializer(many=True, read_only=True)
    approval_status_message = serializers.SerializerMethodField()
    required_approval_levels = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'created_by',
            'amount',
            'description',
            'status',
            'approval_status',
            'approval_status_message',
            'required_approval_levels',
            'approvals',
            'created_at',
            'updated_at',
            'approved_at',
        ]
        read_only_fields = fields

    def get_approval_status_message(self, obj):
        slots = [approval.to_slot() for approval in obj.approvals.all()]
        return status_message(obj.to_snapshot(), slots)

    def get_required_approval_levels(self, obj):
        return required_levels(obj.amount)


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    created_by = UserMinimalSerializer(read_only=True)
    approval_status_message = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'created_by',
            'amount',
            'status',
            'approval_status',
            'approval_status_message',
            'created_at',
        ]
        read_only_fields = fields

    def get_approval_status_message(self, obj):
        slots = [approval.to_slot() for approval in obj.approvals.all()]
        return status_message(obj.to_snapshot(), slots)


class ApprovalStatusSerializer(serializers.Serializer):
    """Serializer for the approval status summary."""

    order_id = serializers.UUIDField()
    status = serializers.ChoiceField(choices=ApprovalStatus.choices)
    message = serializers.CharField()
    required_levels = serializers.ListField(child=serializers.IntegerField())
    approved_levels = serializers.ListField(child=serializers.IntegerField())
    pending_levels = serializers.ListField(child=serializers.IntegerField())
