from django.core.management.base import BaseCommand

from events.config import MediaStoreConfig
from events.services.sweep import sweep_orphans
from events.stores.django_store import DjangoEventStore
from events.stores.file_store import FileSystemMediaStore


class Command(BaseCommand):
    help = "Delete stored event media files that no event references."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List orphaned files without deleting them.",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        orphans = sweep_orphans(
            DjangoEventStore(),
            FileSystemMediaStore(MediaStoreConfig.from_settings()),
            dry_run=dry_run,
        )
        for ref in orphans:
            self.stdout.write(ref)
        verb = "Found" if dry_run else "Deleted"
        self.stdout.write(self.style.SUCCESS(f"{verb} {len(orphans)} orphaned files"))
