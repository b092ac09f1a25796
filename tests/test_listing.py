"""Tests for listing and display sizing."""

from s3mgr.objectstorage.gateway import ObjectEntry
from s3mgr.objectstorage.listing import (
    ListingEntry,
    describe_entries,
    list_prefix,
    summarize,
)


class TestDescribeEntries:
    """Test concurrent sizing of listed entries."""

    def test_sorts_directories_first(self):
        """Test directories sort before files, each group by name."""
        entries = [
            ObjectEntry(key="b.txt", size=10),
            ObjectEntry(key="z/", size=0),
            ObjectEntry(key="a.txt", size=5),
            ObjectEntry(key="m/", size=0),
        ]

        result = describe_entries(entries)

        assert [item.name for item in result] == ["m/", "z/", "a.txt", "b.txt"]
        assert result[0] == ListingEntry(name="m/", size=0, is_dir=True)
        assert result[2] == ListingEntry(name="a.txt", size=5, is_dir=False)

    def test_directory_markers_report_zero(self):
        """Test marker sizes are reported as zero."""
        result = describe_entries([ObjectEntry(key="dir/", size=7)])

        assert result[0].size == 0

    def test_progress_counts_every_entry(self):
        """Test the progress callback sees a strictly increasing count."""
        entries = [ObjectEntry(key=f"file{i}", size=i) for i in range(50)]
        counts = []

        describe_entries(entries, counts.append)

        assert counts == list(range(1, 51))

    def test_empty(self):
        """Test an empty listing."""
        assert describe_entries([]) == []


class TestSummarize:
    """Test listing totals."""

    def test_totals(self):
        listing = [
            ListingEntry(name="d/", size=0, is_dir=True),
            ListingEntry(name="d/a", size=100, is_dir=False),
            ListingEntry(name="b", size=24, is_dir=False),
        ]

        summary = summarize(listing)

        assert summary.total_bytes == 124
        assert summary.file_count == 2
        assert summary.dir_count == 1


class TestListPrefix:
    """Test prefix listing through the gateway."""

    def test_lists_normalized_prefix(self, fake_gateway):
        fake_gateway.objects.update({"data/a": b"1", "data/b": b"22", "database": b""})

        entries = list_prefix(fake_gateway, "data")

        assert [entry.key for entry in entries] == ["data/a", "data/b"]
        assert fake_gateway.operations("list") == ["data/"]

    def test_root(self, fake_gateway):
        fake_gateway.objects.update({"a": b"1", "b/c": b"2"})

        assert len(list_prefix(fake_gateway)) == 2
        assert fake_gateway.operations("list") == [""]
