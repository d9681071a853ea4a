from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Sum

from inventory.models import Product


class Command(BaseCommand):
    help = 'Rebuild stock_quantity and stock_weight of every product from its stock intakes'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report the differences without saving them',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        self.stdout.write(self.style.WARNING(
            'Recalculating stock counters' + (' (dry run)...' if dry_run else '...')
        ))

        products = Product.objects.annotate(
            intake_quantity=Sum('intakes__quantity'),
            intake_weight=Sum('intakes__total_weight'),
        ).order_by('pk')

        checked = 0
        changed = 0

        with transaction.atomic():
            for product in products:
                checked += 1
                new_quantity = product.intake_quantity or Decimal('0')
                new_weight = product.intake_weight or Decimal('0')

                if product.stock_quantity == new_quantity and product.stock_weight == new_weight:
                    continue

                self.stdout.write(
                    f"✓ {product.sku}: stock_quantity {product.stock_quantity} → {new_quantity}, "
                    f"stock_weight {product.stock_weight} → {new_weight}"
                )
                changed += 1

                if not dry_run:
                    product.stock_quantity = new_quantity
                    product.stock_weight = new_weight
                    product.save(update_fields=['stock_quantity', 'stock_weight', 'updated_at'])

        # Summary
        self.stdout.write(self.style.SUCCESS('\n' + '=' * 60))
        self.stdout.write(self.style.SUCCESS('SUMMARY:'))
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(f"Products checked: {checked}")
        self.stdout.write(f"Products {'to update' if dry_run else 'updated'}: {changed}")
        self.stdout.write(self.style.SUCCESS('=' * 60))
