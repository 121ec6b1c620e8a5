# app/services/csv_exporter.py
"""
Record list → CSV text for the finance exports.
Header comes from the first record's keys; rows are joined with "\n" and the
output has no trailing newline. An empty list exports as "".
"""

import json
from typing import Any, Iterable, Mapping

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def escape_field(value: Any) -> str:
    text = format_value(value)
    if any(ch in text for ch in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    rows = list(rows)
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(escape_field(h) for h in headers)]
    for row in rows:
        lines.append(",".join(escape_field(row.get(h)) for h in headers))
    return "\n".join(lines)
