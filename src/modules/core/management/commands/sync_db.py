from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from modules.core.apps import get_gateway


class Command(BaseCommand):
    help = "Drop and recreate the product tables (requires --clear)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Destructively reset the schema: drop every product table and recreate it.",
        )

    def handle(self, *args, **options):
        if not options["clear"]:
            return

        try:
            get_gateway().sync(clear=True)
        except (DatabaseError, ImproperlyConfigured, CommandError) as exc:
            self.stderr.write(str(exc))
            raise CommandError("No se pudo reiniciar la base de datos", returncode=1) from exc

        self.stdout.write(self.style.SUCCESS("Base de datos reiniciada"))
