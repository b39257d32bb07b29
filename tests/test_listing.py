import shutil
import tempfile
import unittest
from pathlib import Path

from apppack.assembler import assemble
from apppack.listing import ListingRenderer, render_listing
from apppack.scaffold import scaffold


class TestListing(unittest.TestCase):
    def setUp(self):
        self.handle = assemble(
            {"app/Main.kt": "fun main() {}\n", "app/build.gradle": "plugins {}\n"},
            "Demo-android",
        )
        scaffold(self.handle, "android", "Demo")
        self.root = self.handle.get_folder("Demo-android")

    def test_story_has_index_rows(self):
        story = ListingRenderer(self.root).build_story()
        self.assertGreater(len(story), 5)

    def test_render_writes_pdf(self):
        tmpdir = Path(tempfile.mkdtemp(prefix="apppack_listing_"))
        try:
            out = render_listing(self.root, tmpdir / "nested" / "listing.pdf")
            blob = out.read_bytes()
            self.assertTrue(blob.startswith(b"%PDF-"))
            self.assertTrue(blob.rstrip().endswith(b"%%EOF"))
        finally:
            shutil.rmtree(tmpdir, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
