from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from charges.models import FeeConfiguration
from charges.services.calculator import compute_charge_breakdown


class Command(BaseCommand):
    help = "Prints the charge breakdown of a fee configuration for a given quantity and unit price."

    def add_arguments(self, parser):
        parser.add_argument("config_id", type=int)
        parser.add_argument("--quantity-kg", default=settings.FEEDMILL["PREVIEW_QUANTITY_KG"])
        parser.add_argument("--unit-price", default=settings.FEEDMILL["PREVIEW_UNIT_PRICE"])

    def handle(self, *args, **options):
        try:
            config = FeeConfiguration.objects.get(pk=options["config_id"])
        except FeeConfiguration.DoesNotExist:
            raise CommandError(f"Fee configuration {options['config_id']} not found")

        breakdown = compute_charge_breakdown(
            config,
            quantity_kg=options["quantity_kg"],
            unit_price_per_kg=options["unit_price"],
        ).rounded()
        ccy = settings.FEEDMILL["CURRENCY"]

        self.stdout.write(f"{config.name} ({breakdown.quantity_kg} kg @ {breakdown.unit_price_per_kg}/kg)")
        self.stdout.write(f"  Pelleting fee:   {ccy} {breakdown.pelleting_charge}")
        self.stdout.write(f"  System fee:      {ccy} {breakdown.system_charge}")
        self.stdout.write(f"  Formulation fee: {ccy} {breakdown.formulation_charge}")
        self.stdout.write(self.style.SUCCESS(f"  Total:           {ccy} {breakdown.total}"))
        if not config.is_usable:
            self.stdout.write(self.style.WARNING("  Note: configuration is inactive or archived."))
