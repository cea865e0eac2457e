"""Unit tests for the storage and resources table audit."""

import unittest
from unittest.mock import Mock

import pytest

from core.exceptions import ExternalServiceError
from core.services.resource_audit_service import ResourceAuditService, format_file_size
from core.services.storage_service import StorageService


def _file(name, size=1024, mimetype="application/pdf"):
    return {
        "name": name,
        "id": f"id-{name}",
        "updated_at": "2025-09-01T10:00:00Z",
        "metadata": {"size": size, "mimetype": mimetype},
    }


def _folder(name):
    return {"name": name, "id": None, "metadata": None}


class FakeResourceRepository:
    """Stands in for ResourceRepository with fixed paths."""

    paths: list[str] = []

    @classmethod
    def get_file_paths(cls):
        return list(cls.paths)


class TestResourceAuditService(unittest.TestCase):
    """Test cases for ResourceAuditService."""

    def setUp(self):
        """Set up a bucket holding a.pdf and b/c.pdf."""
        self.storage = Mock(spec=StorageService)
        tree = {
            "": [_file("a.pdf", 2048), _folder("b")],
            "b": [_file("c.pdf", 512)],
        }
        self.storage.list_objects.side_effect = lambda bucket, prefix="": tree[prefix]
        FakeResourceRepository.paths = ["a.pdf", "missing.pdf"]
        self.service = ResourceAuditService(
            storage=self.storage, resource_repository=FakeResourceRepository
        )

    def test_list_files_descends_into_folders(self):
        """Folder entries are walked and paths joined with a slash."""
        files = self.service.list_files("free-resources")

        self.assertEqual([f.full_path for f in files], ["a.pdf", "b/c.pdf"])
        self.assertEqual(files[1].size, 512)
        self.assertEqual(files[1].extension, ".pdf")
        self.assertEqual(files[1].bucket, "free-resources")

    def test_reconcile_sorts_paths_into_three_sets(self):
        """Matched, missing and orphaned follow exact path equality."""
        report = self.service.reconcile("free-resources")

        self.assertEqual(report.matched, ["a.pdf"])
        self.assertEqual(report.missing_in_storage, ["missing.pdf"])
        self.assertEqual([f.full_path for f in report.orphaned_in_storage], ["b/c.pdf"])
        self.assertEqual(
            report.suggested_actions,
            [
                "Upload file for resource path: missing.pdf",
                "Create database entry for file: b/c.pdf",
            ],
        )
        self.assertEqual(report.summary.storage_files, 2)
        self.assertEqual(report.summary.database_records, 2)

    def test_reconcile_is_case_sensitive(self):
        """A path differing only in case does not match."""
        FakeResourceRepository.paths = ["A.pdf"]

        report = self.service.reconcile("free-resources")

        self.assertEqual(report.matched, [])
        self.assertEqual(report.missing_in_storage, ["A.pdf"])

    def test_signed_urls_collect_errors(self):
        """One failing path does not abort the others."""
        self.storage.create_signed_url.side_effect = [
            "https://signed/a",
            ExternalServiceError("Failed to generate signed URL", "supabase_storage"),
        ]

        results = self.service.generate_signed_urls(["a.pdf", "gone.pdf"], "free-resources")

        self.assertEqual(results[0].signed_url, "https://signed/a")
        self.assertIsNone(results[0].error)
        self.assertIsNone(results[1].signed_url)
        self.assertEqual(results[1].error, "Failed to generate signed URL")

    def test_signed_urls_default_expiry(self):
        """Links last an hour unless asked otherwise."""
        self.storage.create_signed_url.return_value = "https://signed"

        self.service.generate_signed_urls(["a.pdf"], "free-resources")

        self.storage.create_signed_url.assert_called_once_with(
            "free-resources", "a.pdf", 3600
        )

    def test_storage_statistics_per_bucket(self):
        """Sizes are summed and a failing bucket reports its error."""
        self.storage.list_buckets.return_value = ["free-resources", "locked"]

        def list_objects(bucket, prefix=""):
            if bucket == "locked":
                raise ExternalServiceError("Failed to list files: denied", "supabase_storage")
            return {"": [_file("a.pdf", 2048), _folder("b")], "b": [_file("c.pdf", 512)]}[
                prefix
            ]

        self.storage.list_objects.side_effect = list_objects

        stats = self.service.storage_statistics()

        self.assertEqual(stats[0].file_count, 2)
        self.assertEqual(stats[0].total_size, 2560)
        self.assertEqual(stats[0].total_size_formatted, "2.5 KB")
        self.assertEqual(stats[1].error, "Failed to list files: denied")
        self.assertEqual(stats[1].file_count, 0)


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 Bytes"),
        (500, "500 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (10 * 1024 * 1024, "10 MB"),
        (3 * 1024**3 + 1024**3 // 4, "3.25 GB"),
    ],
)
def test_format_file_size(size, expected):
    """Sizes render with a 1024 base and trimmed decimals."""
    assert format_file_size(size) == expected
