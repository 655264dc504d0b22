"""Tests for payload loading and exporters."""

import csv
import io
import json

import pandas as pd
import pytest

from room_allocator.allocator import RoomAllocator
from room_allocator.exceptions import PayloadParseError
from room_allocator.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    dump_payload,
    get_exporter,
    load_payload,
    parse_payload,
)


@pytest.fixture
def result(hotel_payload):
    return RoomAllocator().allocate(hotel_payload)


class TestLoadPayload:
    """Tests for parse_payload and load_payload."""

    def test_parse_payload(self):
        assert parse_payload('{"queries": [], "rooms": []}') == {"queries": [], "rooms": []}

    def test_parse_error(self):
        with pytest.raises(PayloadParseError, match="Error parsing JSON input"):
            parse_payload("{not json", source="input.json")

    def test_parse_error_keeps_source(self):
        with pytest.raises(PayloadParseError) as exc_info:
            parse_payload("", source="stdin")
        assert exc_info.value.source == "stdin"
        assert "from 'stdin'" in str(exc_info.value)

    def test_load_from_file(self, payload_file, hotel_payload):
        assert load_payload(payload_file) == hotel_payload

    def test_load_from_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"queries": [], "rooms": ["A"]}'))
        assert load_payload("-") == {"queries": [], "rooms": ["A"]}

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_rejects_non_standard_constants(self, constant):
        text = f'{{"queries": [{{"checkIn": 1, "checkOut": {constant}}}], "rooms": ["A"]}}'
        with pytest.raises(PayloadParseError, match=constant):
            parse_payload(text)

    def test_rejects_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe{")
        with pytest.raises(PayloadParseError, match="not valid UTF-8") as exc_info:
            load_payload(path)
        assert exc_info.value.source == str(path)


class TestDumpPayload:
    """Tests for dump_payload function."""

    def test_two_space_indent(self, result):
        text = dump_payload(result)
        assert text.startswith('{\n  "queries": [\n')
        assert json.loads(text) == result.to_dict()

    def test_keeps_non_ascii(self):
        result = RoomAllocator().allocate(
            {"queries": [{"checkIn": 1, "checkOut": 2, "guest": "Zoë"}], "rooms": ["Ünit"]}
        )
        text = dump_payload(result)
        assert "Zoë" in text
        assert "Ünit" in text


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export(self, result, tmp_path):
        output = tmp_path / "nested" / "output.json"
        JSONExporter().export(result, output)
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data == result.to_dict()
        assert data["range"] == {"from": "2024-01-01", "to": "2024-01-31"}


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_export(self, result, tmp_path):
        CSVExporter().export(result, tmp_path / "csv")

        with open(tmp_path / "csv" / "queries.csv", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["room_id"] for row in rows] == ["101", "101", "102", ""]
        assert rows[1]["status"] == "fixed"
        assert rows[3]["reason"] == "out_of_range"

        with open(tmp_path / "csv" / "rooms.csv", encoding="utf-8") as f:
            rooms = {row["room_id"]: row["bookings"] for row in csv.DictReader(f)}
        assert rooms == {"101": "2", "102": "1"}

        with open(tmp_path / "csv" / "summary.csv", encoding="utf-8") as f:
            summary = {row["metric"]: row["value"] for row in csv.DictReader(f)}
        assert summary["total_queries"] == "4"
        assert summary["unassigned_out_of_range"] == "1"

    def test_empty_result_skips_query_file(self, tmp_path):
        result = RoomAllocator().allocate({"queries": [], "rooms": []})
        CSVExporter().export(result, tmp_path)
        assert not (tmp_path / "queries.csv").exists()
        assert (tmp_path / "summary.csv").exists()


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_export(self, result, tmp_path):
        output = tmp_path / "allocation.xlsx"
        ExcelExporter().export(result, output)

        sheets = pd.read_excel(output, sheet_name=None)
        assert list(sheets) == ["Queries", "Rooms", "Summary", "Warnings"]
        assert len(sheets["Queries"]) == 4
        assert list(sheets["Rooms"]["room_id"].astype(str)) == ["101", "102"]
        assert sheets["Warnings"].empty
        assert list(sheets["Warnings"].columns) == ["warning"]


class TestGetExporter:
    """Tests for get_exporter factory."""

    @pytest.mark.parametrize(
        "format_type, exporter_class",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, format_type, exporter_class):
        assert isinstance(get_exporter(format_type), exporter_class)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("xml")
