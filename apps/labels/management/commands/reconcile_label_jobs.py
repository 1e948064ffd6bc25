"""
Management command to delete print jobs whose owner has been deleted.

Usage:
    python manage.py reconcile_label_jobs
"""

from django.core.management.base import BaseCommand

from apps.labels.services import OrphanReconciler


class Command(BaseCommand):
    help = "Delete print jobs that reference users who no longer exist"

    def handle(self, *args, **options):
        deleted = OrphanReconciler().reconcile()

        if deleted:
            self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} orphan print job(s)"))
        else:
            self.stdout.write("No orphan print jobs found")
