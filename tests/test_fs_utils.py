import tempfile
import unittest
from pathlib import Path

from tagsmith.fs_utils import MAX_BASENAME_BYTES, fit_filename, path_exists, rename_no_clobber


class TestFsUtils(unittest.TestCase):
    def test_path_exists_true_false(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            p = Path(tmpdir) / "file.txt"
            self.assertEqual(path_exists(p), False)
            p.write_text("x", encoding="utf-8")
            self.assertEqual(path_exists(p), True)

    def test_fit_filename_keeps_short_names(self) -> None:
        p = Path("/music/Artist - Song.mp3")
        self.assertEqual(fit_filename(p), p)

    def test_fit_filename_truncates_long_basename(self) -> None:
        p = Path("/music") / ("é" * MAX_BASENAME_BYTES + ".flac")
        fitted = fit_filename(p)
        self.assertEqual(fitted.parent, Path("/music"))
        self.assertEqual(fitted.suffix, ".flac")
        self.assertLessEqual(len(fitted.name.encode("utf-8")), MAX_BASENAME_BYTES)
        self.assertTrue(fitted.stem.endswith("…"))

    def test_rename_no_clobber(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "a.mp3"
            src.write_bytes(b"x")
            dst = Path(tmpdir) / "b.mp3"
            rename_no_clobber(src, dst)
            self.assertFalse(src.exists())
            self.assertEqual(dst.read_bytes(), b"x")

    def test_rename_no_clobber_refuses_existing_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "a.mp3"
            src.write_bytes(b"x")
            dst = Path(tmpdir) / "b.mp3"
            dst.write_bytes(b"y")
            with self.assertRaises(FileExistsError):
                rename_no_clobber(src, dst)
            self.assertEqual(dst.read_bytes(), b"y")
            self.assertTrue(src.exists())


if __name__ == "__main__":
    unittest.main()
