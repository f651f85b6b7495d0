"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 2 staff users (admin, operator)
- 3 farmers, each with a phone-number login
- A week of morning and evening deliveries with their monthly payments
"""

from datetime import time, timedelta
from decimal import Decimal
import random

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole, UserStatus
from apps.accounts.services import create_user_account
from apps.deliveries.models import Delivery, QualityGrade
from apps.deliveries.services import record_delivery
from apps.farmers.models import Farmer
from apps.farmers.services import register_farmer
from apps.payments.models import Payment

STAFF_ACCOUNTS = [
    ('admin', 'admin123', UserRole.ADMIN),
    ('operator', 'operator123', UserRole.OPERATOR),
]

SAMPLE_FARMERS = [
    {'name': 'John Mukasa', 'phone': '+256771000001', 'location': 'Mbarara', 'id_number': 'CM900101'},
    {'name': 'Grace Nakato', 'phone': '+256771000002', 'location': 'Kiruhura', 'id_number': 'CF880202'},
    {'name': 'Peter Okello', 'phone': '+256771000003', 'location': 'Isingiro', 'id_number': ''},
]

SAMPLE_DAYS = 7


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        self.create_staff()
        farmers = self.create_farmers()
        self.create_deliveries(farmers)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        for username, password, role in STAFF_ACCOUNTS:
            self.stdout.write(f'  {username} / {password} ({role})')
        for farmer in farmers:
            self.stdout.write(f'  {farmer.phone} / {settings.FARMER_DEFAULT_PASSWORD} (farmer)')

    def clear_data(self):
        """Clear all records; superusers are kept."""
        Payment.objects.all().delete()
        Delivery.objects.all().delete()
        Farmer.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def create_staff(self):
        self.stdout.write('  Creating staff users...')

        for username, password, role in STAFF_ACCOUNTS:
            if User.objects.filter(username=username).exists():
                self.stdout.write(f'    {username} already exists, skipped')
                continue
            create_user_account(
                username=username,
                password=password,
                role=role,
                status=UserStatus.ACTIVE,
            )

    def create_farmers(self):
        self.stdout.write('  Creating farmers...')

        farmers = []
        for data in SAMPLE_FARMERS:
            farmer = Farmer.objects.filter(phone=data['phone']).first()
            if farmer is None:
                farmer = register_farmer(
                    join_date=timezone.localdate() - timedelta(days=30),
                    **data,
                )
            farmers.append(farmer)
        return farmers

    def create_deliveries(self, farmers):
        self.stdout.write('  Creating deliveries...')

        today = timezone.localdate()
        grades = [QualityGrade.A, QualityGrade.A, QualityGrade.B, QualityGrade.C]
        count = 0

        for offset in range(SAMPLE_DAYS, 0, -1):
            day = today - timedelta(days=offset - 1)
            for farmer in farmers:
                for delivered_at in (time(6, 30), time(17, 45)):
                    record_delivery(
                        farmer_id=farmer.id,
                        quantity=Decimal(random.randint(50, 250)) / Decimal('10'),
                        quality=random.choice(grades),
                        date=day,
                        time=delivered_at,
                    )
                    count += 1

        self.stdout.write(f'    {count} deliveries recorded')
