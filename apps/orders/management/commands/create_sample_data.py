"""
Management command to create sample data for trying out the approval API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 1 staff user (staff@example.com)
- 3 admins, one per approval level (admin1..admin3@example.com)
- 2 standard users (user1, user2@example.com)
- 5 orders across all threshold tiers, some partly decided

Decisions are applied through the approval service, so the sample data
follows the same rules as the API.
"""

import logging
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.choices import UserRole
from apps.accounts.models import User
from apps.orders.choices import ApprovalDecision
from apps.orders.models import Order, OrderApproval
from apps.orders.services import create_order, submit_decision

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = 'password123'

SAMPLE_ORDERS = [
    ('ORD-001', 'user1', Decimal('300.00'), 'Office supplies - pens and paper'),
    ('ORD-002', 'user2', Decimal('1500.00'), 'Printer cartridges and toner'),
    ('ORD-003', 'user1', Decimal('8000.00'), 'Computer equipment and monitors'),
    ('ORD-004', 'user2', Decimal('50000.00'), 'Server and networking equipment'),
    ('ORD-005', 'user1', Decimal('450.00'), 'Conference room supplies'),
]


class Command(BaseCommand):
    help = 'Create sample users and orders for the approval workflow'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing orders and sample users before creating new data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        if Order.objects.exists():
            self.stdout.write(self.style.WARNING('Orders already exist, skipping. Use --clear to reseed.'))
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        orders = self.create_orders(users)
        self.apply_decisions(users, orders)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts (password: %s):' % SAMPLE_PASSWORD)
        self.stdout.write('  staff@example.com   (staff)')
        self.stdout.write('  admin1@example.com  (admin, level 1)')
        self.stdout.write('  admin2@example.com  (admin, level 2)')
        self.stdout.write('  admin3@example.com  (admin, level 3)')
        self.stdout.write('  user1@example.com   (standard)')
        self.stdout.write('  user2@example.com   (standard)')

    def clear_data(self):
        """Clear orders and sample users from the database."""
        OrderApproval.objects.all().delete()
        Order.objects.all().delete()
        User.objects.filter(is_superuser=False, email__endswith='@example.com').delete()

    def create_users(self):
        """Create staff, admin and standard users."""
        self.stdout.write('  Creating users...')

        specs = {
            'staff': {'display_name': 'Staff User', 'is_staff': True},
            'admin1': {'display_name': 'Admin Level 1', 'role': UserRole.ADMIN, 'admin_level': 1},
            'admin2': {'display_name': 'Admin Level 2', 'role': UserRole.ADMIN, 'admin_level': 2},
            'admin3': {'display_name': 'Admin Level 3', 'role': UserRole.ADMIN, 'admin_level': 3},
            'user1': {'display_name': 'User One'},
            'user2': {'display_name': 'User Two'},
        }

        users = {}
        for key, defaults in specs.items():
            user, created = User.objects.get_or_create(
                email=f'{key}@example.com',
                defaults=defaults,
            )
            if created:
                user.set_password(SAMPLE_PASSWORD)
                user.save()
            users[key] = user

        return users

    def create_orders(self, users):
        """Create sample orders with their approval slots."""
        self.stdout.write('  Creating orders...')

        orders = {}
        for order_number, owner, amount, description in SAMPLE_ORDERS:
            orders[order_number] = create_order(
                created_by=users[owner],
                order_number=order_number,
                amount=amount,
                description=description,
            )
        return orders

    def apply_decisions(self, users, orders):
        """ORD-001 fully approved, ORD-002 waiting on level 2."""
        self.stdout.write('  Applying decisions...')

        submit_decision(
            order_id=orders['ORD-001'].id,
            approver=users['admin1'],
            decision=ApprovalDecision.APPROVED,
            comments='Routine supplies',
        )
        submit_decision(
            order_id=orders['ORD-002'].id,
            approver=users['admin1'],
            decision=ApprovalDecision.APPROVED,
        )
        logger.info("Sample data created: %d orders", len(orders))
