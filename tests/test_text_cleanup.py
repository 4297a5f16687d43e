import random
import unittest

from tagsmith.text_cleanup import (
    collapse_whitespace,
    remove_brackets,
    remove_empty_bracket_pairs,
    remove_substring,
)


class TestRemoveBrackets(unittest.TestCase):
    def test_strips_one_pair_of_each_kind(self) -> None:
        self.assertEqual(remove_brackets("(official video)"), "official video")
        self.assertEqual(remove_brackets("[hard remix]"), "hard remix")
        self.assertEqual(remove_brackets("{instrumental}"), "instrumental")
        self.assertEqual(remove_brackets("<remix>"), "remix")
        self.assertEqual(remove_brackets("【F/C Album】"), "F/C Album")

    def test_only_touches_outer_edges(self) -> None:
        self.assertEqual(remove_brackets("  ((nested))  "), "(nested)")
        self.assertEqual(remove_brackets("(unbalanced"), "unbalanced")
        self.assertEqual(remove_brackets("plain"), "plain")


class TestRemoveSubstring(unittest.TestCase):
    def test_removes_and_trims(self) -> None:
        self.assertEqual(
            remove_substring("Lorem ipsum dolor sic amet.", "dolor"),
            "Lorem ipsum  sic amet.",
        )
        self.assertEqual(remove_substring("03. Artist - Song", "03."), "Artist - Song")

    def test_missing_needle_only_trims(self) -> None:
        self.assertEqual(remove_substring("  Song  ", "[HQ]"), "Song")
        self.assertEqual(remove_substring(" Song ", ""), "Song")


class TestFixpointCleanup(unittest.TestCase):
    SAMPLES = [
        "",
        "Song () []",
        "(<>)",
        "[({<>})]",
        "Song ( ) [ ]",
        "Song (B & C)",
        "a    b  c",
        "  (  )  <>  ",
        "{[()]}x",
    ]

    def test_nested_empty_pairs_are_removed(self) -> None:
        self.assertEqual(remove_empty_bracket_pairs("(<>)"), "")
        self.assertEqual(remove_empty_bracket_pairs("[({<>})]"), "")
        self.assertEqual(remove_empty_bracket_pairs("Song () []"), "Song  ")
        self.assertEqual(remove_empty_bracket_pairs("Song (B)"), "Song (B)")

    def test_collapse_whitespace_handles_long_runs(self) -> None:
        self.assertEqual(collapse_whitespace("a    b  c"), "a b c")
        self.assertEqual(collapse_whitespace("a\t\tb"), "a\t\tb")

    def test_cleanup_is_idempotent(self) -> None:
        for sample in self.SAMPLES:
            with self.subTest(sample=sample):
                once = remove_empty_bracket_pairs(sample)
                self.assertEqual(remove_empty_bracket_pairs(once), once)
                collapsed = collapse_whitespace(sample)
                self.assertEqual(collapse_whitespace(collapsed), collapsed)

    def test_cleanup_is_idempotent_on_generated_input(self) -> None:
        rng = random.Random(1234)
        alphabet = "()[]{}<> a"
        for _ in range(500):
            sample = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 24)))
            with self.subTest(sample=sample):
                once = remove_empty_bracket_pairs(sample)
                self.assertEqual(remove_empty_bracket_pairs(once), once)
                collapsed = collapse_whitespace(sample)
                self.assertNotIn("  ", collapsed)
                self.assertEqual(collapse_whitespace(collapsed), collapsed)


if __name__ == "__main__":
    unittest.main()
