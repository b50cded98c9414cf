from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from src.domain.models import INVALID_DATE

MISSING_CELL = "N/A"
NO_RELEASE_CELL = "No Release"
# Wide enough that rich never wraps or shrinks a column
RENDER_WIDTH = 10_000


def sanitize_cell(cell: Any) -> str:
    if cell is None:
        return MISSING_CELL
    if cell == INVALID_DATE:
        return NO_RELEASE_CELL
    # One cell, one line
    return " ".join(str(cell).split())


def render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """
    Renders a boxed text table with one header row and one line per record.

    Column widths follow the content. Cells are taken literally: no markup, no styling.
    """
    table = Table(box=box.SQUARE, show_header=True, show_lines=True)
    for header in headers:
        table.add_column(Text(str(header)), no_wrap=True)
    for row in rows:
        table.add_row(*(Text(sanitize_cell(cell)) for cell in row))

    console = Console(width=RENDER_WIDTH, color_system=None, force_terminal=False, highlight=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get().rstrip("\n")
