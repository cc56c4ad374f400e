"""Tests for convlog.cli."""

import csv
import json

from convlog.cli import main


def test_missing_output_prints_usage(capsys):
    assert main(["some/*.log"]) == 1

    out = capsys.readouterr().out
    assert "Please provide input filename." in out
    assert "Usage: convlog" in out


def test_no_arguments(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_csv_export(s3_glob, tmp_path, capsys):
    out = tmp_path / "out.csv"

    assert main([s3_glob, str(out)]) == 0

    with open(out, encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert len(rows) == 3
    stdout = capsys.readouterr().out
    assert "Processing 2 files" in stdout
    assert "Wrote 2 records" in stdout


def test_jsonl_export(s3_glob, tmp_path):
    out = tmp_path / "out.jsonl"

    assert main([s3_glob, str(out), "--jsonl"]) == 0

    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    assert json.loads(lines[-1])["output.context.state"] == "X"


def test_bad_path_exits_nonzero(tmp_path, capsys):
    (tmp_path / "app.log").write_text("<----------\n", encoding="utf-8")

    assert main([str(tmp_path / "*.log"), str(tmp_path / "out.csv")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_undecodable_bytes_do_not_abort(tmp_path):
    log = tmp_path / "201709" / "01" / "05" / "0308.1.log"
    log.parent.mkdir(parents=True)
    log.write_bytes(b"<----------\n\xff\xfe garbage\n<----------\n")

    assert main([str(tmp_path / "**" / "*.log"), str(tmp_path / "out.csv")]) == 0


def test_unwritable_output_exits_nonzero(s3_glob, tmp_path, capsys):
    out = tmp_path / "missing-dir" / "out.csv"

    assert main([s3_glob, str(out)]) == 1
    assert "Error: I/O failure:" in capsys.readouterr().err
