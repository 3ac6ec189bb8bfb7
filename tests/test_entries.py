import unittest
from dataclasses import replace
from datetime import datetime, timezone

from s3nav.entries import NO_TIMESTAMP, Entry, EntryKind, format_timestamp, label_for


class TestEntries(unittest.TestCase):
    def test_label_for(self) -> None:
        self.assertEqual(label_for("a/"), "a/")
        self.assertEqual(label_for("a/b/"), "b/")
        self.assertEqual(label_for("a/b/c.txt"), "c.txt")
        self.assertEqual(label_for("b.txt"), "b.txt")

    def test_directory_entry(self) -> None:
        entry = Entry.directory("logs/2024/")
        self.assertEqual(entry.kind, EntryKind.DIRECTORY)
        self.assertEqual(entry.label, "2024/")
        self.assertIsNone(entry.size)
        self.assertEqual(entry.last_modified, NO_TIMESTAMP)
        self.assertTrue(entry.is_directory)
        self.assertTrue(entry.is_matched)

    def test_file_entry_formats_timestamp(self) -> None:
        modified = datetime(2024, 3, 5, 14, 7, 59, tzinfo=timezone.utc)
        entry = Entry.file("logs/app.log", size=10, last_modified=modified)
        self.assertEqual(entry.kind, EntryKind.FILE)
        self.assertEqual(entry.label, "app.log")
        self.assertEqual(entry.size, 10)
        self.assertEqual(entry.last_modified, "2024-03-05 14:07:59")
        self.assertFalse(entry.is_directory)

    def test_file_entry_without_timestamp_uses_sentinel(self) -> None:
        self.assertEqual(Entry.file("b.txt", size=0).last_modified, NO_TIMESTAMP)
        self.assertEqual(format_timestamp(None), NO_TIMESTAMP)

    def test_file_entry_rejects_negative_size(self) -> None:
        with self.assertRaises(ValueError):
            Entry.file("b.txt", size=-1)

    def test_directory_entry_rejects_size(self) -> None:
        with self.assertRaises(ValueError):
            Entry(path="a/", label="a/", kind=EntryKind.DIRECTORY, size=3)

    def test_is_matched_is_not_part_of_identity(self) -> None:
        entry = Entry.file("c.txt", size=5)
        self.assertEqual(replace(entry, is_matched=False), entry)


if __name__ == "__main__":
    unittest.main()
