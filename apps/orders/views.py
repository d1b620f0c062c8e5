from rest_framework import viewsets, status, mixins, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.http import Http404
from drf_spectacular.utils import extend_schema
from decimal import Decimal, InvalidOperation

from .approval import required_levels
from .permissions import CanManageOrder
from .serializers import (
    OrderSerializer,
    OrderListSerializer,
    ApprovalStatusSerializer,
    # Input serializers
    OrderFilterSerializer,
    OrderCreateSerializer,
    OrderUpdateSerializer,
    ApprovalDecisionInputSerializer,
)
from .services import (
    create_order,
    get_order_by_id,
    list_orders,
    update_order,
    delete_order,
    submit_decision,
    get_approval_status,
    OrderNotFoundError,
    DuplicateOrderNumberError,
    OrderNotDeletableError,
    InvalidLevelError,
    AlreadyDecidedError,
    UnauthorizedDecisionError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error(message, status_code):
    return Response({'error': message}, status=status_code)


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for purchase orders and their approval workflow.

    list: Get orders (filterable by creator, status, approval status)
    create: Submit a new order (creates its approval slots)
    retrieve: Get a specific order with approvals
    partial_update: Update the order description
    destroy: Delete an order that has no decisions yet
    approve: Approve or reject at the current user's admin level
    approval_status: Required / approved / pending levels with message
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, CanManageOrder]
    pagination_class = OrderPagination
    lookup_value_regex = r"[0-9a-fA-F-]{32,36}"

    def get_queryset(self):
        """Filter orders using input serializer validation."""
        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_orders(
            created_by=self.request.user if params.get('mine') else None,
            status=params.get('status'),
            approval_status=params.get('approval_status'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return OrderListSerializer
        return OrderSerializer

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderSerializer, 400: ErrorResponseSerializer},
        tags=['orders'],
    )
    def create(self, request):
        """Create a new order together with its approval slots."""
        input_serializer = OrderCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order = create_order(created_by=request.user, **input_serializer.validated_data)
        except DuplicateOrderNumberError as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=OrderUpdateSerializer,
        responses={200: OrderSerializer, 404: ErrorResponseSerializer},
        tags=['orders'],
    )
    def partial_update(self, request, pk=None):
        """Update the order description."""
        order = self.get_object()
        input_serializer = OrderUpdateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order = update_order(
                order_id=order.id,
                description=input_serializer.validated_data['description']
            )
        except OrderNotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)

        return Response(OrderSerializer(order).data)

    @extend_schema(
        responses={204: None, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['orders'],
    )
    def destroy(self, request, pk=None):
        """Delete an order (only while pending)."""
        order = self.get_object()

        try:
            delete_order(order_id=order.id)
        except OrderNotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except OrderNotDeletableError as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=ApprovalDecisionInputSerializer,
        responses={
            200: OrderSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=['orders'],
    )
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """
        Approve or reject an order at the current user's admin level.

        POST /api/orders/{id}/approve/
        Body: {"decision": "approved" | "rejected", "comments": "optional"}
        """
        input_serializer = ApprovalDecisionInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order = submit_decision(
                order_id=pk,
                approver=request.user,
                decision=input_serializer.validated_data['decision'],
                comments=input_serializer.validated_data['comments'],
            )
        except OrderNotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except UnauthorizedDecisionError as e:
            return _error(str(e), status.HTTP_403_FORBIDDEN)
        except (InvalidLevelError, AlreadyDecidedError) as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(
        responses={200: ApprovalStatusSerializer, 404: ErrorResponseSerializer},
        tags=['orders'],
    )
    @action(detail=True, methods=['get'])
    def approval_status(self, request, pk=None):
        """
        Get approval progress for an order.

        GET /api/orders/{id}/approval_status/
        """
        try:
            data = get_approval_status(order_id=pk)
        except OrderNotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)

        return Response(ApprovalStatusSerializer(data).data)

    def get_object(self):
        """Load through the service layer and check object permissions."""
        try:
            order = get_order_by_id(order_id=self.kwargs['pk'])
        except OrderNotFoundError:
            raise Http404('Order not found')

        self.check_object_permissions(self.request, order)
        return order


@extend_schema(
    responses={200: drf_serializers.ListField(child=drf_serializers.IntegerField())},
    description="Get the admin levels required to approve an order of the given amount.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def approval_levels(request, amount):
    """Get required approval levels for an amount."""
    try:
        value = Decimal(amount)
    except InvalidOperation:
        return _error('Amount must be a number', status.HTTP_400_BAD_REQUEST)

    if not value.is_finite() or value < 0:
        return _error('Amount must be a non-negative number', status.HTTP_400_BAD_REQUEST)

    return Response(required_levels(value))
