"""Validate an asset catalog file and print a summary."""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from analysis.distribution import systems_by_environment
from analysis.timeframe import distinct_days
from catalog.errors import CatalogError
from catalog.loader import load_catalog


class Command(BaseCommand):
    """Load a catalog with full validation and report its contents."""

    help = "Validate an asset catalog YAML file (defaults to settings.ASSET_CATALOG_PATH)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--path",
            type=Path,
            default=None,
            help="Catalog file to validate instead of settings.ASSET_CATALOG_PATH.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path: Path = options["path"] or Path(settings.ASSET_CATALOG_PATH)
        try:
            catalog = load_catalog(path, default_timezone=timezone.get_default_timezone())
        except CatalogError as exc:
            raise CommandError(f"Invalid catalog {path}: {exc}") from exc

        self.stdout.write(
            f"Catalog {path}: {len(catalog.environments)} environments, "
            f"{len(catalog.systems)} systems, {len(catalog.assets)} assets, "
            f"{len(catalog.timeframe)} timestamps over {len(distinct_days(catalog.timeframe))} days."
        )
        for bucket in systems_by_environment(catalog):
            self.stdout.write(f"- {bucket.name}: {bucket.value} systems")
        self.stdout.write(self.style.SUCCESS("Catalog is valid."))
        return None
