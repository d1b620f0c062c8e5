import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.orders.choices import ApprovalDecision, ApprovalStatus, OrderStatus
from apps.orders.models import Order, OrderApproval


# =============================================================================
# Order CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestOrderCreate:
    """Tests for POST /api/orders/"""

    def test_create_order(self, requester_client, requester):
        url = reverse('orders:order-list')
        data = {
            'order_number': 'ORD-100',
            'amount': '1500.00',
            'description': 'New laptops',
        }
        response = requester_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['order_number'] == 'ORD-100'
        assert response.data['status'] == OrderStatus.PENDING
        assert response.data['approval_status'] == ApprovalStatus.AWAITING_LEVEL_1
        assert response.data['required_approval_levels'] == [1, 2]
        assert [a['admin_level'] for a in response.data['approvals']] == [1, 2]
        assert response.data['approvals'][0]['approved_by_name'] == 'Pending'
        assert response.data['created_by']['email'] == requester.email

    def test_create_order_duplicate_number(self, requester_client, small_order):
        url = reverse('orders:order-list')
        data = {'order_number': small_order.order_number, 'amount': '10.00'}
        response = requester_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_create_order_negative_amount(self, requester_client):
        url = reverse('orders:order-list')
        response = requester_client.post(url, {'order_number': 'ORD-NEG', 'amount': '-1.00'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data

    def test_create_order_unauthenticated(self, api_client):
        url = reverse('orders:order-list')
        response = api_client.post(url, {'order_number': 'ORD-X', 'amount': '10.00'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestOrderRead:
    """Tests for GET /api/orders/ and /api/orders/{id}/"""

    def test_list_orders(self, other_client, small_order, medium_order):
        url = reverse('orders:order-list')
        response = other_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert 'approval_status_message' in response.data['results'][0]

    def test_list_only_mine(self, other_client, other_user, small_order):
        url = reverse('orders:order-list')
        response = other_client.get(url, {'mine': 'true'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0

    def test_list_filter_by_approval_status(self, level_1_client, small_order, medium_order):
        level_1_client.post(reverse('orders:order-approve', kwargs={'pk': small_order.id}))

        url = reverse('orders:order-list')
        response = level_1_client.get(url, {'approval_status': ApprovalStatus.FINALLY_APPROVED})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['order_number'] == small_order.order_number

    def test_list_invalid_filter(self, requester_client):
        url = reverse('orders:order-list')
        response = requester_client.get(url, {'status': 'bogus'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve_order(self, requester_client, large_order):
        url = reverse('orders:order-detail', kwargs={'pk': large_order.id})
        response = requester_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['required_approval_levels'] == [1, 2, 3]
        assert response.data['approval_status_message'] == (
            "Awaiting approval from: Level 1, Level 2, Level 3"
        )

    def test_retrieve_not_found(self, requester_client):
        url = reverse('orders:order-detail', kwargs={'pk': uuid4()})
        response = requester_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestOrderUpdateDelete:
    """Tests for PATCH/DELETE /api/orders/{id}/"""

    def test_creator_updates_description(self, requester_client, small_order):
        url = reverse('orders:order-detail', kwargs={'pk': small_order.id})
        response = requester_client.patch(url, {'description': 'Pens and paper'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['description'] == 'Pens and paper'

    def test_other_user_cannot_update(self, other_client, small_order):
        url = reverse('orders:order-detail', kwargs={'pk': small_order.id})
        response = other_client.patch(url, {'description': 'Hijacked'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_staff_can_update(self, staff_client, small_order):
        url = reverse('orders:order-detail', kwargs={'pk': small_order.id})
        response = staff_client.patch(url, {'description': 'Staff edit'})

        assert response.status_code == status.HTTP_200_OK

    def test_creator_deletes_pending_order(self, requester_client, small_order):
        url = reverse('orders:order-detail', kwargs={'pk': small_order.id})
        response = requester_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Order.objects.filter(id=small_order.id).exists()

    def test_cannot_delete_decided_order(self, requester_client, level_1_client, medium_order):
        level_1_client.post(reverse('orders:order-approve', kwargs={'pk': medium_order.id}))

        url = reverse('orders:order-detail', kwargs={'pk': medium_order.id})
        response = requester_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Can only delete pending orders'

    def test_other_user_cannot_delete(self, other_client, small_order):
        url = reverse('orders:order-detail', kwargs={'pk': small_order.id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Order.objects.filter(id=small_order.id).exists()


# =============================================================================
# Approval Workflow Tests
# =============================================================================

@pytest.mark.django_db
class TestApprove:
    """Tests for POST /api/orders/{id}/approve/"""

    def test_approve_single_level(self, level_1_client, admin_level_1, small_order):
        url = reverse('orders:order-approve', kwargs={'pk': small_order.id})
        response = level_1_client.post(url, {'decision': 'approved', 'comments': 'OK'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['approval_status'] == ApprovalStatus.FINALLY_APPROVED
        assert response.data['status'] == OrderStatus.APPROVED
        assert response.data['approved_at'] is not None
        assert response.data['approval_status_message'] == "Order is fully approved"

        approval = response.data['approvals'][0]
        assert approval['decision'] == ApprovalDecision.APPROVED
        assert approval['approved_by']['email'] == admin_level_1.email
        assert approval['comments'] == 'OK'

    def test_decision_defaults_to_approved(self, level_1_client, small_order):
        url = reverse('orders:order-approve', kwargs={'pk': small_order.id})
        response = level_1_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['approval_status'] == ApprovalStatus.FINALLY_APPROVED

    def test_two_level_flow(self, level_1_client, level_2_client, medium_order):
        url = reverse('orders:order-approve', kwargs={'pk': medium_order.id})

        response = level_1_client.post(url, {'decision': 'approved'})
        assert response.data['approval_status'] == ApprovalStatus.AWAITING_LEVEL_2
        assert response.data['approval_status_message'] == "Awaiting approval from: Level 2"

        response = level_2_client.post(url, {'decision': 'approved'})
        assert response.data['approval_status'] == ApprovalStatus.FINALLY_APPROVED

    def test_reject(self, level_2_client, medium_order):
        url = reverse('orders:order-approve', kwargs={'pk': medium_order.id})
        response = level_2_client.post(url, {'decision': 'rejected', 'comments': 'No budget'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['approval_status'] == ApprovalStatus.REJECTED
        assert response.data['status'] == OrderStatus.REJECTED
        assert response.data['approval_status_message'] == "Order has been rejected"

    def test_decide_after_rejection(self, level_1_client, level_2_client, medium_order):
        url = reverse('orders:order-approve', kwargs={'pk': medium_order.id})
        level_2_client.post(url, {'decision': 'rejected'})

        response = level_1_client.post(url, {'decision': 'approved'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Order has already been rejected'

    def test_already_decided(self, level_1_client, medium_order):
        url = reverse('orders:order-approve', kwargs={'pk': medium_order.id})
        level_1_client.post(url, {'decision': 'approved'})

        response = level_1_client.post(url, {'decision': 'rejected'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already been decided' in response.data['error']
        approval = OrderApproval.objects.get(order=medium_order, admin_level=1)
        assert approval.decision == ApprovalDecision.APPROVED

    def test_level_not_required(self, level_3_client, medium_order):
        url = reverse('orders:order-approve', kwargs={'pk': medium_order.id})
        response = level_3_client.post(url, {'decision': 'approved'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid approval level for this order: Level 3'

    def test_standard_user_cannot_approve(self, requester_client, small_order):
        url = reverse('orders:order-approve', kwargs={'pk': small_order.id})
        response = requester_client.post(url, {'decision': 'approved'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Approver has no admin level assigned'
        assert Order.objects.get(id=small_order.id).approval_status == ApprovalStatus.AWAITING_LEVEL_1

    def test_invalid_decision_value(self, level_1_client, small_order):
        url = reverse('orders:order-approve', kwargs={'pk': small_order.id})
        response = level_1_client.post(url, {'decision': 'pending'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'decision' in response.data

    def test_order_not_found(self, level_1_client):
        url = reverse('orders:order-approve', kwargs={'pk': uuid4()})
        response = level_1_client.post(url, {'decision': 'approved'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client, small_order):
        url = reverse('orders:order-approve', kwargs={'pk': small_order.id})
        response = api_client.post(url, {'decision': 'approved'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestApprovalStatus:
    """Tests for GET /api/orders/{id}/approval_status/"""

    def test_approval_status(self, requester_client, level_3_client, large_order):
        level_3_client.post(reverse('orders:order-approve', kwargs={'pk': large_order.id}))

        url = reverse('orders:order-approval-status', kwargs={'pk': large_order.id})
        response = requester_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == ApprovalStatus.AWAITING_LEVEL_1
        assert response.data['required_levels'] == [1, 2, 3]
        assert response.data['approved_levels'] == [3]
        assert response.data['pending_levels'] == [1, 2]
        assert response.data['message'] == "Awaiting approval from: Level 1, Level 2"

    def test_not_found(self, requester_client):
        url = reverse('orders:order-approval-status', kwargs={'pk': uuid4()})
        response = requester_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestApprovalLevels:
    """Tests for GET /api/orders/approval-levels/{amount}/"""

    @pytest.mark.parametrize('amount, levels', [
        ('0', [1]),
        ('500', [1]),
        ('500.01', [1, 2]),
        ('2000', [1, 2]),
        ('2000.01', [1, 2, 3]),
        ('20000', [1, 2, 3]),
    ])
    def test_required_levels(self, requester_client, amount, levels):
        url = reverse('orders:approval-levels', kwargs={'amount': amount})
        response = requester_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == levels

    @pytest.mark.parametrize('amount', ['abc', '-5', 'NaN'])
    def test_invalid_amount(self, requester_client, amount):
        url = reverse('orders:approval-levels', kwargs={'amount': amount})
        response = requester_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
