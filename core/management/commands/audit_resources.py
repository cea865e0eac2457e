"""Compare the resources bucket with the ``resources`` table."""

import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import ExternalServiceError
from core.services.resource_audit_service import resource_audit_service


class Command(BaseCommand):
    """Report matched, missing and orphaned resource files.

    Read-only: suggested actions are printed, never applied.
    """

    help = "Audit storage files against the resources table"

    def add_arguments(self, parser):
        """Register command line options."""
        parser.add_argument(
            "--bucket",
            default=settings.RESOURCES_BUCKET,
            help="Bucket to audit (default: %(default)s)",
        )
        parser.add_argument(
            "--sample-urls",
            type=int,
            default=0,
            metavar="N",
            help="Mint signed URLs for the first N matched files",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the full report as JSON",
        )

    def handle(self, *_args, **options):
        """Run the audit and print the report."""
        bucket = options["bucket"]
        try:
            report = resource_audit_service.reconcile(bucket)
            stats = resource_audit_service.storage_statistics()
            samples = resource_audit_service.generate_signed_urls(
                report.matched[: options["sample_urls"]], bucket
            )
        except ExternalServiceError as e:
            raise CommandError(e.message) from e

        if options["json"]:
            payload = {
                "report": report.model_dump(mode="json"),
                "storage_statistics": [s.model_dump(mode="json") for s in stats],
                "signed_urls": [s.model_dump(mode="json") for s in samples],
            }
            self.stdout.write(json.dumps(payload, indent=2))
            return

        summary = report.summary
        self.stdout.write(self.style.MIGRATE_HEADING(f"Resource audit: {bucket}"))
        self.stdout.write(f"  Files in storage:     {summary.storage_files}")
        self.stdout.write(f"  Database records:     {summary.database_records}")
        self.stdout.write(self.style.SUCCESS(f"  Matched:              {summary.matched}"))
        self._write_count("Missing in storage:  ", summary.missing_in_storage)
        self._write_count("Orphaned in storage: ", summary.orphaned_in_storage)

        for path in report.missing_in_storage:
            self.stdout.write(f"    missing  {path}")
        for file in report.orphaned_in_storage:
            self.stdout.write(f"    orphaned {file.full_path} ({file.size} bytes)")

        if report.suggested_actions:
            self.stdout.write(self.style.MIGRATE_HEADING("Suggested actions"))
            for action in report.suggested_actions:
                self.stdout.write(f"  - {action}")

        self.stdout.write(self.style.MIGRATE_HEADING("Storage statistics"))
        for bucket_stats in stats:
            if bucket_stats.error:
                self.stdout.write(
                    self.style.ERROR(f"  {bucket_stats.bucket}: {bucket_stats.error}")
                )
                continue
            self.stdout.write(
                f"  {bucket_stats.bucket}: {bucket_stats.file_count} files, "
                f"{bucket_stats.total_size_formatted}"
            )

        if samples:
            self.stdout.write(self.style.MIGRATE_HEADING("Signed URLs"))
            for sample in samples:
                if sample.error:
                    self.stdout.write(self.style.ERROR(f"  {sample.file_path}: {sample.error}"))
                else:
                    self.stdout.write(f"  {sample.file_path}: {sample.signed_url}")

    def _write_count(self, label: str, count: int) -> None:
        style = self.style.WARNING if count else self.style.SUCCESS
        self.stdout.write(style(f"  {label} {count}"))
