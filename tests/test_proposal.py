import unittest

from tagsmith.proposal import TagProposal
from tagsmith.templates import render_template, sanitize_filename


def make_proposal(title: str = "Song", artists=("A", "B", "C"), **fields) -> TagProposal:
    proposal = TagProposal(title=title, **fields)
    proposal.feature(artists)
    return proposal


class TestUpdate(unittest.TestCase):
    def test_default_templates(self) -> None:
        proposal = make_proposal()
        proposal.update()
        self.assertEqual(proposal.artist, "A")
        self.assertEqual(proposal.final_title, "Song (B & C)")
        self.assertEqual(proposal.filename, "A - Song (B & C)")

    def test_three_featured_artists(self) -> None:
        proposal = make_proposal(artists=["A", "B", "C", "D"])
        proposal.update()
        self.assertEqual(proposal.final_title, "Song (B, C & D)")

    def test_remix_without_features(self) -> None:
        proposal = make_proposal(artists=["A"], remix="Radio Edit")
        proposal.update()
        self.assertEqual(proposal.final_title, "Song [Radio Edit]")
        self.assertEqual(proposal.filename, "A - Song [Radio Edit]")

    def test_empty_proposal_renders_bare_separator(self) -> None:
        proposal = TagProposal()
        proposal.update()
        self.assertIsNone(proposal.artist)
        self.assertIsNone(proposal.final_title)
        self.assertEqual(proposal.filename, "-")

    def test_update_is_idempotent(self) -> None:
        proposal = make_proposal(year=2024, remix="Remix")
        proposal.update()
        first = (proposal.artist, proposal.final_title, proposal.filename)
        proposal.update()
        self.assertEqual((proposal.artist, proposal.final_title, proposal.filename), first)

    def test_custom_templates(self) -> None:
        proposal = make_proposal(artists=["A"], track=4, year=2024)
        proposal.update("{title}", "{track}. {artist} - {title} ({year})")
        self.assertEqual(proposal.filename, "4. A - Song (2024)")
        proposal.year = None
        proposal.update("{title}", "{track}. {artist} - {title} ({year})")
        self.assertEqual(proposal.filename, "4. A - Song")

    def test_filename_is_sanitized(self) -> None:
        proposal = make_proposal(title="AC/DC: Live?", artists=["A"])
        proposal.update()
        self.assertEqual(proposal.final_title, "AC/DC: Live?")
        self.assertEqual(proposal.filename, "A - AC-DC Live")


class TestEdits(unittest.TestCase):
    def test_artist_without_value_clears_all_artists(self) -> None:
        proposal = make_proposal()
        proposal.update()
        proposal.apply_edits([("ARTIST", None)])
        proposal.update()
        self.assertEqual(len(proposal.all_artists), 0)
        self.assertIsNone(proposal.artist)

    def test_artist_value_replaces_list(self) -> None:
        proposal = make_proposal()
        proposal.apply_edits([("artist", "X;Y ; X;")])
        self.assertEqual(proposal.all_artists, ["X", "Y"])

    def test_text_fields_set_and_clear(self) -> None:
        proposal = make_proposal(album="Old", genre="Pop")
        proposal.apply_edits(
            [("ALBUM", "New"), ("GENRE", None), ("ALBUM_ARTIST", "Various"), ("TITLE", "Other")]
        )
        self.assertEqual(proposal.album, "New")
        self.assertIsNone(proposal.genre)
        self.assertEqual(proposal.album_artist, "Various")
        self.assertEqual(proposal.title, "Other")

    def test_invalid_numbers_keep_previous_value(self) -> None:
        proposal = make_proposal(track=3, year=1999)
        with self.assertLogs("tagsmith.proposal", level="WARNING"):
            messages = proposal.apply_edits([("TRACK", "three"), ("YEAR", "soon")])
        self.assertEqual(len(messages), 2)
        self.assertIn("TRACK is not a number: three", messages[0])
        self.assertEqual(proposal.track, 3)
        self.assertEqual(proposal.year, 1999)

    def test_numbers_set_and_clear(self) -> None:
        proposal = make_proposal(track=3, year=1999)
        self.assertEqual(proposal.apply_edits([("TRACK", "7"), ("YEAR", None)]), [])
        self.assertEqual(proposal.track, 7)
        self.assertIsNone(proposal.year)
        self.assertFalse(proposal.set_track("-1"))
        self.assertFalse(proposal.set_track("70000"))
        self.assertEqual(proposal.track, 7)

    def test_tag_values_follow_update(self) -> None:
        proposal = make_proposal(artists=["A", "B"], year=2001, track=2)
        proposal.update()
        values = proposal.tag_values()
        self.assertEqual(values["ARTIST"], "A")
        self.assertEqual(values["TITLE"], "Song (B)")
        self.assertEqual(values["YEAR"], "2001")
        self.assertEqual(values["TRACK"], "2")
        self.assertIsNone(values["ALBUM"])


class TestTemplates(unittest.TestCase):
    def test_unknown_tokens_are_left_alone(self) -> None:
        self.assertEqual(render_template("{title} {bpm}", {"title": "Song"}), "Song {bpm}")

    def test_integers_render_plainly(self) -> None:
        self.assertEqual(render_template("{track} {year}", {"track": 4, "year": 2024}), "4 2024")

    def test_cleanup_after_substitution(self) -> None:
        self.assertEqual(
            render_template("{title} ({feat}) [{remix}] <{year}>", {"title": "Song"}), "Song"
        )
        self.assertEqual(render_template("({title} [{remix}])", {}), "")

    def test_sanitize_filename(self) -> None:
        self.assertEqual(sanitize_filename('a/b\\c <d> "e" f|g?*'), "a-b-c d e fg")
        self.assertEqual(sanitize_filename("-"), "-")


if __name__ == "__main__":
    unittest.main()
