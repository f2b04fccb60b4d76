from __future__ import annotations
from pathlib import Path
from unittest.mock import patch

from moving_sale.cli import main as cli_main
from moving_sale.services.build import BuildError

"""Exit code contract tests.

build    : 0 catalog rendered, 2 load-error message rendered, 1 fatal
compress : 1 missing argument / missing directory, 0 otherwise
"""


def test_build_fatal_without_config(temp_workdir: Path, capsys):
    code = cli_main(["build"])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_build_success(write_config, write_csv, capsys):
    assert cli_main(["build"]) == 0


def test_build_error_page_when_source_missing(write_config, temp_workdir: Path, capsys):
    code = cli_main(["build"])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR load: failed to load CSV" in out
    assert "SUMMARY items=0" in out and "error_page=1" in out
    assert (temp_workdir / "public" / "index.html").exists()


def test_build_fatal_when_output_unwritable(write_config, write_csv, capsys):
    with patch("moving_sale.cli.__main__.build_site", side_effect=BuildError("failed to write x")):
        code = cli_main(["build"])
    assert code == 1
    assert "ERROR build: failed to write x" in capsys.readouterr().out


def test_compress_missing_argument(temp_workdir: Path, capsys):
    code = cli_main(["compress"])
    out = capsys.readouterr().out
    assert code == 1
    assert "Usage: moving-sale compress" in out


def test_compress_missing_directory(temp_workdir: Path, capsys):
    code = cli_main(["compress", str(temp_workdir / "nope")])
    out = capsys.readouterr().out
    assert code == 1
    assert "not found" in out


def test_compress_success(temp_workdir: Path, make_image, capsys):
    folder = temp_workdir / "pics"
    folder.mkdir()
    make_image(folder / "a.jpg", size=(50, 50))
    code = cli_main(["compress", str(folder), "--max-size", "20", "--quality", "70"])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1 failed=0 converted=0" in out


def test_compress_partial_failure_still_zero(temp_workdir: Path, make_image, capsys):
    folder = temp_workdir / "pics"
    folder.mkdir()
    make_image(folder / "a.jpg", size=(50, 50))
    (folder / "broken.png").write_bytes(b"garbage")
    code = cli_main(["compress", str(folder)])
    out = capsys.readouterr().out
    assert code == 0
    assert "WARN broken.png:" in out
    assert "failed=1" in out
    assert list((temp_workdir / "logs").glob("errors-*.log"))
