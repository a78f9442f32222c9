from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from hijri_date.conf import get_config
from hijri_date.exceptions import DataSourceError
from hijri_date.table import ConversionTable


class Command(BaseCommand):
    help = "Manually refetch the map of Hijri month starts to Gregorian dates from the external source"

    def add_arguments(self, parser):
        parser.add_argument("--url", type=str, default=None, help="Fetch from this URL instead of HIJRI['conversion']['data_url']")

    def handle(self, *args, **options):
        config = get_config()
        table = ConversionTable.from_config(config, data_url=options.get("url"))

        self.stdout.write(f"Clearing cached table ({table.cache_key})...")
        table.forget()

        self.stdout.write("Fetching data from source...")
        try:
            data = table.load(force_refresh=True)
        except DataSourceError as e:
            raise CommandError(str(e)) from e

        if not data:
            self.stdout.write(self.style.WARNING("Source has a header but no rows; cached an empty table."))
            return

        keys = list(data)
        self.stdout.write(self.style.SUCCESS(
            f"✅ Done. months={len(data)} | first={keys[0]} ({data[keys[0]]}) | last={keys[-1]} ({data[keys[-1]]}) "
            f"| cached for {table.cache_period} min"
        ))
