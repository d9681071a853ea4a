from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.models import Product, StockIntake


class Command(BaseCommand):
    help = 'Deletes every stock intake and product (users are kept).'

    def add_arguments(self, parser):
        parser.add_argument(
            '--yes',
            action='store_true',
            help='Do not ask for confirmation',
        )

    def handle(self, *args, **options):
        if not options['yes']:
            answer = input('This deletes ALL products and stock intakes. Type "yes" to continue: ')
            if answer.strip().lower() != 'yes':
                self.stdout.write(self.style.WARNING('Aborted.'))
                return

        self.stdout.write(self.style.WARNING('⚠️  Clearing inventory data...'))

        with transaction.atomic():
            for model in (StockIntake, Product):
                deleted, _ = model.objects.all().delete()
                self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} rows from {model._meta.label}"))

        self.stdout.write(self.style.SUCCESS('✅ Inventory cleared successfully!'))
