"""Tests for the ``sirds`` command line."""

from __future__ import annotations

import pytest
from PIL import Image

from sirds.cli import main, parse_args


class TestParseArgs:
    def test_defaults_follow_config(self):
        args = parse_args(["mask.png"])
        assert args.dpi == 72
        assert args.eye_ratio == 2.5
        assert args.mu == pytest.approx(1 / 3)
        assert args.out == "stereogram.png"

    def test_needs_mask_or_demo(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_mask_and_demo_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["mask.png", "--demo-ring"])


class TestMain:
    def test_demo_ring(self, tmp_path, capsys):
        out = tmp_path / "ring.png"
        main(["--demo-ring", "--width", "80", "--height", "60", "--dpi", "8",
              "--seed", "1", "--out", str(out)])
        with Image.open(out) as img:
            assert img.size == (80, 60)
            assert img.mode == "RGBA"
        printed = capsys.readouterr().out
        assert "Saved:" in printed
        assert "ring.png" in printed

    def test_mask_file_with_palette_to_jpeg(self, tmp_path, ring_mask):
        mask_path = tmp_path / "mask.png"
        ring_mask.save(mask_path)
        out = tmp_path / "nested" / "out.jpg"
        main([str(mask_path), "--palette", "#000000", "#FFFFFF", "--dpi", "8",
              "--seed", "2", "--out", str(out)])
        with Image.open(out) as img:
            assert img.size == (80, 60)
            assert img.mode == "RGB"

    def test_bad_color_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--demo-ring", "--transparent-color", "#nothex", "--out", str(tmp_path / "x.png")])
        assert "sirds:" in str(exc.value)

    def test_bad_config_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--demo-ring", "--mu", "1.5", "--out", str(tmp_path / "x.png")])
        assert "mu" in str(exc.value)

    def test_undecodable_mask_exits(self, tmp_path):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image")
        with pytest.raises(SystemExit) as exc:
            main([str(bad), "--out", str(tmp_path / "x.png")])
        assert "could not decode" in str(exc.value)

    def test_unknown_output_extension_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--demo-ring", "--width", "20", "--height", "10", "--dpi", "2",
                  "--out", str(tmp_path / "x.xyz")])
        assert str(exc.value).startswith("sirds:")
        assert not (tmp_path / "x.xyz").exists()

    def test_directory_as_mask_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path), "--out", str(tmp_path / "x.png")])
        assert str(exc.value).startswith("sirds:")
