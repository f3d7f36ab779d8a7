"""HTML preview of a parsed dataset."""

from __future__ import annotations

import html
import io
from typing import Iterable, Sequence

from ..core import Row

_CELL_STYLE = "border:1px solid #ccc;padding:4px"


def render_preview(schema: Sequence[str], rows: Iterable[Row], *, limit: int | None = None) -> str:
    """Return an HTML table showing ``rows`` under the ``schema`` columns.

    ``limit`` caps the number of rendered rows; the CSV export is unaffected.
    """

    buffer = io.StringIO()
    buffer.write('<div class="preview" style="max-height:400px;width:100%;overflow:auto">')
    buffer.write('<table style="border-collapse:collapse;width:100%;font-size:0.8rem"><thead><tr>')
    for column in schema:
        buffer.write(f'<th style="{_CELL_STYLE};background:#eee">')
        buffer.write(html.escape(column))
        buffer.write("</th>")
    buffer.write("</tr></thead><tbody>")
    for index, row in enumerate(rows):
        if limit is not None and index >= limit:
            break
        buffer.write("<tr>")
        for column in schema:
            buffer.write(f'<td style="{_CELL_STYLE}">')
            buffer.write(html.escape(row.get(column) or ""))
            buffer.write("</td>")
        buffer.write("</tr>")
    buffer.write("</tbody></table></div>")
    return buffer.getvalue()
