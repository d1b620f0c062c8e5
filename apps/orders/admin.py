# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html

from .approval import status_message
from .choices import ApprovalDecision, ApprovalStatus
from .models import Order, OrderApproval


class OrderApprovalInline(admin.TabularInline):
    """Inline admin for approval slots within an order."""
    model = OrderApproval
    extra = 0
    fields = [
        'admin_level',
        'decision_badge',
        'approved_by',
        'comments',
        'decided_at',
    ]
    readonly_fields = fields

    def decision_badge(self, obj):
        """Display decision as colored badge."""
        colors = {
            ApprovalDecision.PENDING: ('#E5C49A', '#2C1810'),
            ApprovalDecision.APPROVED: ('#6B8E5E', 'white'),
            ApprovalDecision.REJECTED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.decision, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_decision_display()
        )
    decision_badge.short_description = 'Decision'

    def has_add_permission(self, request, obj=None):
        """Slots are created with the order by the service layer."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for purchase orders.

    Approval state is read-only here; decisions go through the API so the
    workflow rules and row locking apply.
    """

    list_display = [
        'order_number',
        'created_by',
        'amount',
        'approval_status_badge',
        'status',
        'created_at',
        'approved_at',
    ]

    list_filter = [
        'status',
        'approval_status',
        'created_at',
    ]

    search_fields = [
        'order_number',
        'description',
        'created_by__email',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    readonly_fields = [
        'id',
        'amount',
        'status',
        'approval_status',
        'approval_message',
        'created_at',
        'updated_at',
        'approved_at',
    ]

    inlines = [OrderApprovalInline]

    def approval_status_badge(self, obj):
        """Display approval status as colored badge."""
        colors = {
            ApprovalStatus.FINALLY_APPROVED: ('#6B8E5E', 'white'),
            ApprovalStatus.REJECTED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.approval_status, ('#E5C49A', '#2C1810'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_approval_status_display()
        )
    approval_status_badge.short_description = 'Approval'
    approval_status_badge.admin_order_field = 'approval_status'

    def approval_message(self, obj):
        slots = [approval.to_slot() for approval in obj.approvals.all()]
        return status_message(obj.to_snapshot(), slots)
    approval_message.short_description = 'Approval progress'

    def has_add_permission(self, request):
        """Orders must be created through the API so slots are planned."""
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('created_by').prefetch_related('approvals')
