import unittest

from application.services.section_extractor import best_section, split_paragraphs


class TestBestSection(unittest.TestCase):
    def test_picks_window_with_most_query_occurrences(self):
        paragraphs = [
            "Introduction to the rig.",
            "Safety notes.",
            "General wiring overview.",
            "Firmware flash: hold reset, then flash the firmware image.",
            "Verify firmware version after the flash.",
            "Appendix.",
        ]
        content = "\n\n".join(paragraphs)
        section = best_section(content, "firmware flash", 120)
        self.assertIn("hold reset", section)
        self.assertLessEqual(len(section), 120)

    def test_ties_keep_earliest_window(self):
        content = "\n\n".join(["alpha one", "filler", "filler", "filler", "alpha two"])
        section = best_section(content, "alpha", 40)
        self.assertEqual(section, "alpha one\n\nfiller\n\nfiller")

    def test_falls_back_to_leading_characters(self):
        content = "\n\n".join(["aaaa", "bbbb", "cccc", "dddd"]) * 3
        self.assertEqual(best_section(content, "zzzz", 10), content[:10])

    def test_short_content_without_match_is_returned_whole(self):
        content = "\n\n".join(["aaaa", "bbbb", "cccc"])
        self.assertEqual(best_section(content, "zzzz", 100), content)

    def test_result_never_exceeds_max_length(self):
        content = "\n\n".join(f"paragraph {i} mentions relay and relay again" for i in range(40))
        for limit in (30, 60, 120, 500):
            self.assertLessEqual(len(best_section(content, "relay", limit)), limit)

    def test_sentence_split_when_few_paragraphs(self):
        self.assertEqual(split_paragraphs("One. Two. Three"), ["One", "Two", "Three"])
        self.assertEqual(len(split_paragraphs("a\n\nb\n\nc")), 3)


if __name__ == "__main__":
    unittest.main()
