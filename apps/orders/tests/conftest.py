import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.choices import UserRole
from apps.accounts.models import User
from apps.orders.services import create_order


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def requester(db):
    """Standard user who submits orders."""
    return User.objects.create_user(
        email='requester@example.com',
        password='TestPass123!',
        display_name='Requester',
    )


@pytest.fixture
def other_user(db):
    """Standard user with no relation to the test orders."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def staff_user(db):
    """Staff user (can manage any order but has no approval level)."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff',
        is_staff=True,
    )


@pytest.fixture
def admin_level_1(db):
    return User.objects.create_user(
        email='admin1@example.com',
        password='TestPass123!',
        display_name='Admin Level 1',
        role=UserRole.ADMIN,
        admin_level=1,
    )


@pytest.fixture
def admin_level_2(db):
    return User.objects.create_user(
        email='admin2@example.com',
        password='TestPass123!',
        display_name='Admin Level 2',
        role=UserRole.ADMIN,
        admin_level=2,
    )


@pytest.fixture
def admin_level_3(db):
    return User.objects.create_user(
        email='admin3@example.com',
        password='TestPass123!',
        display_name='Admin Level 3',
        role=UserRole.ADMIN,
        admin_level=3,
    )


@pytest.fixture
def admin_without_level(db):
    """Admin role but no level assigned yet."""
    return User.objects.create_user(
        email='admin-nolevel@example.com',
        password='TestPass123!',
        role=UserRole.ADMIN,
    )


# =============================================================================
# Authenticated clients
# =============================================================================

@pytest.fixture
def requester_client(requester):
    return _client_for(requester)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)


@pytest.fixture
def staff_client(staff_user):
    return _client_for(staff_user)


@pytest.fixture
def level_1_client(admin_level_1):
    return _client_for(admin_level_1)


@pytest.fixture
def level_2_client(admin_level_2):
    return _client_for(admin_level_2)


@pytest.fixture
def level_3_client(admin_level_3):
    return _client_for(admin_level_3)


# =============================================================================
# Orders
# =============================================================================

@pytest.fixture
def small_order(requester):
    """Order needing level 1 only."""
    return create_order(
        created_by=requester,
        order_number='ORD-SMALL',
        amount=Decimal('300.00'),
        description='Office supplies',
    )


@pytest.fixture
def medium_order(requester):
    """Order needing levels 1 and 2."""
    return create_order(
        created_by=requester,
        order_number='ORD-MEDIUM',
        amount=Decimal('1500.00'),
        description='Monitors',
    )


@pytest.fixture
def large_order(requester):
    """Order needing levels 1, 2 and 3."""
    return create_order(
        created_by=requester,
        order_number='ORD-LARGE',
        amount=Decimal('8000.00'),
        description='Server hardware',
    )
