import unittest

from apppack.extractor import (
    GRAMMARS,
    extract_files,
    extract_with_grammar,
    parse_alternate,
    parse_basic,
    parse_primary,
)


PRIMARY_AND_ALTERNATE = "\n".join([
    "Here is the project:",
    "// Filename: a.swift",
    "```swift",
    "let a = 1",
    "```",
    "",
    "```kotlin",
    "// Filename: b.kt",
    "val b = 2",
    "```",
])


class TestGrammars(unittest.TestCase):
    def test_primary_single_block(self):
        text = '// Filename: src/App.swift\n```swift\nprint("hi")\n```'
        self.assertEqual(extract_files(text), {"src/App.swift": 'print("hi")'})

    def test_primary_without_language_tag(self):
        text = "// Filename: build.gradle\n```\nplugins {}\n```"
        self.assertEqual(extract_files(text), {"build.gradle": "plugins {}"})

    def test_primary_multiple_blocks_keep_order(self):
        text = "\n\n".join([
            "// Filename: b.swift\n```swift\nlet b = 2\n```",
            "// Filename: a.swift\n```swift\nlet a = 1\n```",
        ])
        self.assertEqual(list(extract_files(text)), ["b.swift", "a.swift"])

    def test_primary_stops_at_first_closing_fence(self):
        text = "// Filename: one.kt\n```kotlin\nval x = 1\n```\ntrailing prose\n```\nnot code\n```"
        self.assertEqual(extract_files(text), {"one.kt": "val x = 1"})

    def test_alternate_marker_inside_fence(self):
        text = "```kotlin\n// Filename: app/Main.kt\nfun main() {}\n```"
        self.assertEqual(extract_files(text), {"app/Main.kt": "fun main() {}\n"})

    def test_basic_bare_filename(self):
        text = "```swift\nContentView.swift:\nimport SwiftUI\n```"
        name, file_map = extract_with_grammar(text)
        self.assertEqual(name, "basic")
        self.assertEqual(file_map, {"ContentView.swift": "import SwiftUI\n"})

    def test_basic_rejects_unknown_extension(self):
        self.assertEqual(parse_basic("```\nnotes.txt:\nhello\n```"), [])

    def test_grammar_order(self):
        self.assertEqual([name for name, _ in GRAMMARS], ["primary", "alternate", "basic"])


class TestExtractFiles(unittest.TestCase):
    def test_primary_wins_over_alternate(self):
        # Both conventions are present; only the primary matches are used.
        self.assertTrue(parse_alternate(PRIMARY_AND_ALTERNATE))
        self.assertEqual(len(parse_primary(PRIMARY_AND_ALTERNATE)), 1)
        name, file_map = extract_with_grammar(PRIMARY_AND_ALTERNATE)
        self.assertEqual(name, "primary")
        self.assertEqual(file_map, {"a.swift": "let a = 1"})

    def test_duplicate_paths_keep_last_content(self):
        text = "\n".join([
            "// Filename: App.kt",
            "```kotlin",
            "old",
            "```",
            "// Filename: Other.kt",
            "```kotlin",
            "other",
            "```",
            "// Filename: App.kt",
            "```kotlin",
            "new",
            "```",
        ])
        file_map = extract_files(text)
        self.assertEqual(list(file_map), ["App.kt", "Other.kt"])
        self.assertEqual(file_map["App.kt"], "new")

    def test_blank_path_is_dropped(self):
        self.assertEqual(extract_files("// Filename:  \n```\ncode\n```"), {})

    def test_plain_text_yields_empty_map(self):
        self.assertEqual(extract_with_grammar("plain text, no markers"), (None, {}))

    def test_never_raises_on_odd_input(self):
        for raw in ["", "```", "// Filename: x\n```", "```\n:\n```", None]:
            self.assertEqual(extract_files(raw), {})


if __name__ == "__main__":
    unittest.main()
