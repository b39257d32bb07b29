import io
import unittest
import zipfile
from unittest import mock

from apppack.archive import ArchiveHandle
from apppack.errors import SerializationError, StructureError


class TestArchiveHandle(unittest.TestCase):
    def test_folder_rejects_empty_and_control_characters(self):
        handle = ArchiveHandle()
        with self.assertRaises(StructureError):
            handle.folder("")
        with self.assertRaises(StructureError):
            handle.folder("  ")
        with self.assertRaises(StructureError):
            handle.folder("Bad\x00Name-ios")
        self.assertEqual(handle.paths(), [])

    def test_folder_rejects_relative_segments(self):
        handle = ArchiveHandle()
        for name in ["..", ".", "Demo/../x", "./Demo-ios"]:
            with self.assertRaises(StructureError):
                handle.folder(name)
        self.assertEqual(handle.paths(), [])

    def test_folder_is_get_or_create(self):
        handle = ArchiveHandle()
        handle.folder("Demo-ios")
        handle.folder("Demo-ios")
        handle.folder("Demo-ios/src")
        self.assertEqual(handle.paths(), ["Demo-ios/", "Demo-ios/src/"])

    def test_get_folder_does_not_create(self):
        handle = ArchiveHandle()
        self.assertIsNone(handle.get_folder("Demo-ios"))
        self.assertEqual(handle.paths(), [])
        handle.folder("Demo-ios")
        self.assertEqual(handle.get_folder("Demo-ios").name, "Demo-ios")

    def test_add_file_creates_parents(self):
        handle = ArchiveHandle()
        root = handle.folder("Root")
        root.add_file("a/b/c.txt", "x")
        self.assertEqual(handle.paths(), ["Root/", "Root/a/", "Root/a/b/", "Root/a/b/c.txt"])
        self.assertTrue(root.exists("a/b"))
        self.assertTrue(root.exists("a/b/"))
        self.assertEqual(root.get_file("a/b/c.txt"), b"x")
        self.assertIsNone(root.get_file("a/b/"))

    def test_add_file_if_absent_keeps_existing(self):
        handle = ArchiveHandle()
        root = handle.folder("Root")
        root.add_file(".gitignore", "custom")
        self.assertFalse(root.add_file_if_absent(".gitignore", "default"))
        self.assertTrue(root.add_file_if_absent("other", "default"))
        self.assertEqual(root.get_file(".gitignore"), b"custom")

    def test_folder_file_entries_are_relative(self):
        handle = ArchiveHandle()
        root = handle.folder("Root")
        root.add_file("src/a.kt", "a")
        handle.add_file("Elsewhere/b.kt", "b")
        self.assertEqual(root.file_entries(), {"src/a.kt": b"a"})


class TestArchiveSerialize(unittest.IsolatedAsyncioTestCase):
    async def test_serialize_writes_folders_and_files(self):
        handle = ArchiveHandle()
        root = handle.folder("Demo-android")
        root.folder(".idea")
        root.add_file("app/Main.kt", "fun main() {}")

        blob = await handle.serialize()

        with zipfile.ZipFile(io.BytesIO(blob)) as zf:
            names = zf.namelist()
            self.assertIn("Demo-android/.idea/", names)
            self.assertIn("Demo-android/app/", names)
            self.assertEqual(zf.read("Demo-android/app/Main.kt"), b"fun main() {}")
            self.assertTrue(zf.getinfo("Demo-android/.idea/").is_dir())

    async def test_serialize_wraps_writer_errors(self):
        handle = ArchiveHandle()
        handle.folder("Root")
        with mock.patch.object(handle, "_write_zip", side_effect=OSError("disk gone")):
            with self.assertRaises(SerializationError) as ctx:
                await handle.serialize()
        self.assertIsInstance(ctx.exception.__cause__, OSError)


if __name__ == "__main__":
    unittest.main()
