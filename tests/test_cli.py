"""
Tests for the obocanon command line interface.
"""

import shutil
from pathlib import Path

import pytest

from obocanon.cli import EXIT_ERROR, EXIT_NOT_CANONICAL, EXIT_OK, build_parser, main

INPUT_DIR = Path(__file__).parent / "input"


@pytest.fixture
def equivtest(tmp_path):
    path = tmp_path / "equivtest.obo"
    shutil.copy(INPUT_DIR / "equivtest.obo", path)
    return path


class TestNormalize:
    """normalize writes canonical text."""

    def test_stdout(self, equivtest, capsys):
        assert main(["normalize", str(equivtest)]) == EXIT_OK
        out = capsys.readouterr().out
        assert "intersection_of: Y:1 ! y1\nintersection_of: R:1 Z:1 ! r1 z1\n" in out
        assert out.endswith("name: r1\n\n")

    def test_output_file(self, equivtest, tmp_path):
        target = tmp_path / "out.obo"
        assert main(["normalize", str(equivtest), "-o", str(target)]) == EXIT_OK
        assert target.read_text(encoding="utf-8").startswith("format-version: 1.4\n")

    def test_in_place(self, equivtest):
        assert main(["normalize", "--in-place", str(equivtest)]) == EXIT_OK
        assert main(["check", str(equivtest)]) == EXIT_OK

    def test_config_option(self, equivtest, tmp_path, capsys):
        config = tmp_path / "options.yaml"
        config.write_text("annotate_references: false\n", encoding="utf-8")
        assert main(["normalize", str(equivtest), "--config", str(config)]) == EXIT_OK
        assert "intersection_of: Y:1\n" in capsys.readouterr().out

    def test_output_and_in_place_conflict(self, equivtest):
        with pytest.raises(SystemExit):
            main(["normalize", str(equivtest), "--in-place", "-o", "x.obo"])


class TestCheck:
    """check reports whether a file is already canonical."""

    def test_canonical_file(self, capsys):
        assert main(["check", str(INPUT_DIR / "writer_round_trip.obo")]) == EXIT_OK
        assert "canonical" in capsys.readouterr().out

    def test_non_canonical_file(self, equivtest, capsys):
        assert main(["check", str(equivtest)]) == EXIT_NOT_CANONICAL
        assert "not canonical" in capsys.readouterr().out


class TestReport:
    """report prints diagnostics."""

    def test_report(self, capsys):
        assert main(["report", str(INPUT_DIR / "writer_round_trip.obo")]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Terms:      4" in out
        assert "Unknown tags: another_tag, local_note" in out


class TestErrors:
    """Failures become a message on stderr and exit status 2."""

    def test_missing_file(self, tmp_path, capsys):
        assert main(["check", str(tmp_path / "nope.obo")]) == EXIT_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_parse_error(self, tmp_path, capsys):
        path = tmp_path / "bad.obo"
        path.write_text("[Term]\nname: no id\n", encoding="utf-8")
        assert main(["normalize", str(path)]) == EXIT_ERROR
        assert "without id" in capsys.readouterr().err

    def test_bad_config(self, equivtest, tmp_path, capsys):
        config = tmp_path / "options.yaml"
        config.write_text("tag_policies:\n  synonym: shuffle\n", encoding="utf-8")
        assert main(["normalize", str(equivtest), "--config", str(config)]) == EXIT_ERROR
        assert "Unknown order policy" in capsys.readouterr().err

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
