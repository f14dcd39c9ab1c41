import json

import pytest

from csv_listings.__main__ import main


EBAY_CSV = (
    "SKU,Title,Description,Start Price,Quantity,Picture URL 1,Picture URL 2,Picture URL 3\n"
    "E1,Clock,Wall clock,20,1,a,,b\n"
)


def test_cli_writes_events_to_stdout(tmp_path, capsys):
    src = tmp_path / "ebay.csv"
    src.write_text(EBAY_CSV, encoding="utf-8")

    assert main([str(src), "--platform", "ebay", "--created-at", "5"]) == 0

    (event,) = json.loads(capsys.readouterr().out)
    assert event["created_at"] == 5
    assert event["tags"][0] == ["d", "E1"]
    assert ["image", "a", "", "0"] in event["tags"]
    assert ["image", "b", "", "1"] in event["tags"]


def test_cli_records_only_to_file(tmp_path):
    src = tmp_path / "ebay.csv"
    src.write_text(EBAY_CSV, encoding="utf-8")
    out = tmp_path / "records.json"

    assert main([str(src), "--platform", "ebay", "--records-only", "--output", str(out)]) == 0

    (record,) = json.loads(out.read_text(encoding="utf-8"))
    assert record["id"] == "E1"
    assert record["images"] == ["a", "b"]
    assert record["dimensionUnit"] is None


def test_cli_decode_failure_exit_code(tmp_path, capsys):
    src = tmp_path / "broken.csv"
    src.write_text('SKU,Title\nE1,"open\n', encoding="utf-8")

    assert main([str(src), "--platform", "ebay"]) == 2
    assert capsys.readouterr().err.startswith("error: decode: ")


def test_cli_rejects_directory_input(tmp_path):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path), "--platform", "ebay"])
    assert "Input file not found" in str(info.value)
