from __future__ import annotations

import re
from typing import Iterator

_LINE_BREAK = re.compile(r"\r?\n")


def clean_cell(value: str | None) -> str:
    """Trim a pasted spreadsheet cell and drop surrounding double quotes."""
    if not value:
        return ""
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def iter_tab_rows(text: str | None, *, min_columns: int) -> Iterator[list[str]]:
    """Yield cleaned cells of every tab-separated line with enough columns.

    Lines with fewer than min_columns cells are skipped.
    """
    text = (text or "").strip()
    if not text:
        return
    for line in _LINE_BREAK.split(text):
        parts = line.split("\t")
        if len(parts) < min_columns:
            continue
        yield [clean_cell(p) for p in parts]


def cell(row: list[str], index: int) -> str:
    return row[index] if index < len(row) else ""
