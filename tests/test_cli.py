"""
Tests for cli

Test Coverage:
- main(): Each subcommand writes a sprite and prints a summary
- Exit codes for empty input, malformed specs and bad options
- Undecodable images and broken import settings do not abort the run
"""
import pytest
from PIL import Image

from sprite_toolkit.cli import EXIT_FAILED, EXIT_OK, EXIT_USAGE, build_parser, main


@pytest.fixture
def two_pngs(tmp_path):
    paths = []
    for name, color in (("a.png", (255, 0, 0, 255)), ("b.png", (0, 0, 255, 255))):
        path = tmp_path / name
        Image.new("RGBA", (4, 2), color).save(path)
        paths.append(path)
    return paths


@pytest.mark.parametrize("mode,size", [
    ("horizontal", (8, 2)),
    ("vertical", (4, 4)),
    ("overlay", (4, 2)),
])
def test_main_combines(mode, size, two_pngs, tmp_path, capsys):
    out_dir = tmp_path / "out"

    code = main([mode, *map(str, two_pngs), "-o", str(out_dir)])

    assert code == EXIT_OK
    written = sorted(out_dir.glob("*.png"))
    assert len(written) == 1
    with Image.open(written[0]) as image:
        assert image.size == size
    assert "Combined 2 sprites ->" in capsys.readouterr().out


def test_main_reports_skipped(two_pngs, tmp_path, capsys):
    """Crops outside their image are skipped, not fatal."""
    a, b = two_pngs
    code = main(["horizontal", str(a), f"{b}@10,10,2,2", "-o", str(tmp_path / "out")])

    assert code == EXIT_OK
    assert "(1 skipped)" in capsys.readouterr().out


def test_main_no_import_settings(two_pngs, tmp_path):
    out_dir = tmp_path / "out"

    main(["overlay", *map(str, two_pngs), "-o", str(out_dir), "--no-import-settings"])

    assert not list(out_dir.glob("*.import.json"))


def test_main_prefix(two_pngs, tmp_path):
    out_dir = tmp_path / "out"

    main(["vertical", *map(str, two_pngs), "-o", str(out_dir), "--prefix", "hero"])

    assert [p.name.startswith("hero_") for p in out_dir.glob("*.png")] == [True]


def test_main_missing_files_fail(tmp_path, caplog):
    code = main(["overlay", str(tmp_path / "nope.png"), "-o", str(tmp_path / "out")])

    assert code == EXIT_FAILED
    assert "no_input_selected" in caplog.text


def test_main_malformed_spec(two_pngs, tmp_path):
    code = main(["overlay", f"{two_pngs[0]}@1,2", "-o", str(tmp_path / "out")])

    assert code == EXIT_USAGE


def test_main_rejects_bad_prefix(two_pngs):
    with pytest.raises(SystemExit) as excinfo:
        main(["overlay", str(two_pngs[0]), "--prefix", "a/b"])

    assert excinfo.value.code == 2


def test_parser_requires_mode():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_skips_undecodable_image(two_pngs, tmp_path, capsys):
    """One corrupt source is skipped and the rest are still combined."""
    # Arrange
    garbage = tmp_path / "garbage.png"
    garbage.write_bytes(b"not an image")

    # Act
    code = main(["horizontal", str(two_pngs[0]), str(garbage), "-o", str(tmp_path / "out")])

    # Assert
    assert code == EXIT_OK
    assert "Combined 1 sprites ->" in capsys.readouterr().out


def test_main_ignores_broken_import_settings(two_pngs, tmp_path, capsys):
    """A malformed .import.json falls back to rendering instead of failing."""
    # Arrange
    a, b = two_pngs
    (tmp_path / "b.png.import.json").write_text("{broken", encoding="utf-8")

    # Act
    code = main(["horizontal", f"{a}@0,0,2,2", f"{b}@0,0,2,2", "-o", str(tmp_path / "out")])

    # Assert
    assert code == EXIT_OK
    assert "Combined 2 sprites ->" in capsys.readouterr().out
    assert (tmp_path / "b.png.import.json").read_text(encoding="utf-8") == "{broken"
