"""Payload loading and export functionality for allocation results."""

import csv
import json
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import pandas as pd

from .constants import JSON_INDENT, STDIN_MARKER
from .exceptions import PayloadParseError
from .models import AllocationResult


def _reject_constant(name: str) -> Any:
    """Refuse NaN and Infinity, which Python's json accepts but JSON does not."""
    raise ValueError(f"Non-standard JSON constant '{name}'")


def parse_payload(text: str, source: str | None = None) -> Any:
    """Parse raw JSON text into a payload.

    Args:
        text: Raw JSON text
        source: Where the text came from, for error messages

    Raises:
        PayloadParseError: If the text is not valid JSON
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise PayloadParseError(str(e), source=source) from e


def load_payload(input_path: Path | str) -> Any:
    """Load a payload from a JSON file, or from stdin when the path is ``-``.

    Raises:
        PayloadParseError: If the input is not UTF-8 encoded valid JSON
    """
    from_stdin = str(input_path) == STDIN_MARKER
    source = "stdin" if from_stdin else str(input_path)
    try:
        if from_stdin:
            text = sys.stdin.read()
        else:
            with open(input_path, encoding="utf-8") as f:
                text = f.read()
    except UnicodeDecodeError as e:
        raise PayloadParseError(f"input is not valid UTF-8 ({e})", source=source) from e

    return parse_payload(text, source=source)


def dump_payload(result: AllocationResult, indent: int = JSON_INDENT) -> str:
    """Serialize the output payload to JSON text."""
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)


def _query_rows(result: AllocationResult) -> list[dict[str, Any]]:
    """Flatten queries into table rows (input index, state, interval, room)."""
    rows = []
    for query in result.queries:
        rows.append(
            {
                "index": query.index,
                "check_in": query.check_in,
                "check_out": query.check_out,
                "assigned": query.assigned,
                "room_id": query.room_id or "",
                "status": query.status.value if query.status else "",
                "reason": query.reason.value if query.reason else "",
            }
        )
    return rows


def _room_rows(result: AllocationResult) -> list[dict[str, Any]]:
    """One row per room with its booking count."""
    return [
        {"room_id": room, "bookings": count}
        for room, count in result.statistics.by_room.items()
    ]


def _summary_rows(result: AllocationResult) -> list[dict[str, Any]]:
    """Metric/value rows for the run summary."""
    stats = result.statistics
    rows = [
        {"metric": "generation_date", "value": result.generation_date},
        {"metric": "total_queries", "value": stats.total_queries},
        {"metric": "total_fixed", "value": stats.total_fixed},
        {"metric": "total_assigned", "value": stats.total_assigned},
        {"metric": "total_unassigned", "value": stats.total_unassigned},
        {"metric": "assignment_rate", "value": round(stats.assignment_rate, 4)},
    ]
    for reason, count in sorted(stats.by_reason.items()):
        rows.append({"metric": f"unassigned_{reason}", "value": count})
    return rows


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: AllocationResult, output_path: str | Path) -> None:
        """Export allocation result to file.

        Args:
            result: AllocationResult to export
            output_path: Path to output file or directory
        """
        pass


class JSONExporter(BaseExporter):
    """Export the output payload to JSON."""

    def __init__(self, indent: int = JSON_INDENT, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: AllocationResult, output_path: str | Path) -> None:
        """Export the output payload to a JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )
            f.write("\n")


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: AllocationResult, output_path: str | Path) -> None:
        """Export allocation result to CSV files.

        Creates three files:
        - queries.csv: All queries in check-in order
        - rooms.csv: Booking count per room
        - summary.csv: Overall summary

        Args:
            result: AllocationResult to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "queries.csv", _query_rows(result))
        self._write_csv(output_dir / "rooms.csv", _room_rows(result))
        self._write_csv(output_dir / "summary.csv", _summary_rows(result))

    def _write_csv(self, output_path: Path, rows: list[dict]) -> None:
        """Write rows to CSV file."""
        if not rows:
            return

        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: AllocationResult, output_path: str | Path) -> None:
        """Export allocation result to Excel file.

        Creates workbook with sheets:
        - Queries: All queries in check-in order
        - Rooms: Booking count per room
        - Summary: Overall summary
        - Warnings: Warning list

        Args:
            result: AllocationResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        query_columns = [
            "index", "check_in", "check_out", "assigned", "room_id", "status", "reason"
        ]

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._write_sheet(writer, "Queries", _query_rows(result), query_columns)
            self._write_sheet(writer, "Rooms", _room_rows(result), ["room_id", "bookings"])
            self._write_sheet(writer, "Summary", _summary_rows(result), ["metric", "value"])
            self._write_sheet(
                writer,
                "Warnings",
                [{"warning": warning} for warning in result.warnings],
                ["warning"],
            )

    def _write_sheet(
        self,
        writer: pd.ExcelWriter,
        sheet_name: str,
        rows: list[dict],
        columns: list[str],
    ) -> None:
        """Write rows to a named sheet, keeping headers for empty tables."""
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=columns)
        df.to_excel(writer, sheet_name=sheet_name, index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
