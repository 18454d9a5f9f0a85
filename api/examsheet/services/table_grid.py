"""
Table Grid Engine
Row/column editing and rectangular merge/split for TableGrid.

Every operation returns a new grid and leaves its input untouched; rejected
operations raise before anything is copied or changed.
"""
from typing import Dict, Iterable, List, Optional, Tuple, Union

from examsheet.errors import InvalidSelection, StructuralConflict
from examsheet.schemas import TableCell, TableGrid, TableRow, VerticalAlign

Position = Tuple[int, int]


def new_grid(rows: int = 2, cols: int = 2) -> TableGrid:
    """Creates an empty rows x cols grid."""
    if rows < 1 or cols < 1:
        raise ValueError("A table needs at least one row and one column")
    return TableGrid(rows=[TableRow(cells=[TableCell() for _ in range(cols)]) for _ in range(rows)])


def cell_positions(grid: TableGrid) -> Dict[str, Position]:
    """Maps every cell id to its (row, column) grid coordinate."""
    return {
        cell.id: (row_index, col_index)
        for row_index, row in enumerate(grid.rows)
        for col_index, cell in enumerate(row.cells)
    }


def iter_masters(grid: TableGrid):
    """Yields (row, col, cell) for every cell carrying a span."""
    for row_index, row in enumerate(grid.rows):
        for col_index, cell in enumerate(row.cells):
            if cell.is_master:
                yield row_index, col_index, cell


def _find(grid: TableGrid, cell_id: str) -> Tuple[int, int, TableCell]:
    for row_index, row in enumerate(grid.rows):
        for col_index, cell in enumerate(row.cells):
            if cell.id == cell_id:
                return row_index, col_index, cell
    raise InvalidSelection(f"Unknown cell '{cell_id}'")


# --- Rows & Columns ---

def add_row(grid: TableGrid) -> TableGrid:
    """Appends a row of empty cells."""
    updated = grid.model_copy(deep=True)
    width = updated.column_count or 1
    updated.rows.append(TableRow(cells=[TableCell() for _ in range(width)]))
    updated.row_heights.append(None)
    if not grid.rows:
        updated.column_widths = [None] * width
    return updated


def add_column(grid: TableGrid) -> TableGrid:
    """Appends an empty cell to every row."""
    if not grid.rows:
        return new_grid(1, 1)

    updated = grid.model_copy(deep=True)
    for row in updated.rows:
        row.cells.append(TableCell())
    updated.column_widths.append(None)
    return updated


def remove_row(grid: TableGrid, index: Optional[int] = None) -> TableGrid:
    """
    Removes a row (the last one by default).

    Args:
        grid: Grid to edit.
        index: Zero-based row index.

    Returns:
        New grid without the row.

    Raises:
        StructuralConflict: If the row lies inside a vertical span or is the only row.
        IndexError: If index is out of range.
    """
    if grid.row_count <= 1:
        raise StructuralConflict("A table must keep at least one row")

    index = grid.row_count - 1 if index is None else index
    if not 0 <= index < grid.row_count:
        raise IndexError(f"Row index {index} out of range")

    for row_index, col_index, cell in iter_masters(grid):
        span = cell.rowspan or 1
        if span > 1 and row_index <= index < row_index + span:
            raise StructuralConflict(
                f"Row {index} is part of the merged cell at ({row_index}, {col_index})"
            )

    updated = grid.model_copy(deep=True)
    del updated.rows[index]
    del updated.row_heights[index]
    return updated


def remove_column(grid: TableGrid, index: Optional[int] = None) -> TableGrid:
    """
    Removes a column (the last one by default).

    Raises:
        StructuralConflict: If the column lies inside a horizontal span or is the only column.
        IndexError: If index is out of range.
    """
    if grid.column_count <= 1:
        raise StructuralConflict("A table must keep at least one column")

    index = grid.column_count - 1 if index is None else index
    if not 0 <= index < grid.column_count:
        raise IndexError(f"Column index {index} out of range")

    for row_index, col_index, cell in iter_masters(grid):
        span = cell.colspan or 1
        if span > 1 and col_index <= index < col_index + span:
            raise StructuralConflict(
                f"Column {index} is part of the merged cell at ({row_index}, {col_index})"
            )

    updated = grid.model_copy(deep=True)
    for row in updated.rows:
        del row.cells[index]
    del updated.column_widths[index]
    return updated


# --- Sizing & Cell Properties ---

def _size_value(value: Optional[int]) -> Optional[int]:
    return value if value and value > 0 else None


def set_row_height(grid: TableGrid, index: int, height: Optional[int]) -> TableGrid:
    """Sets a row height in px; None or a non-positive value restores auto height."""
    if not 0 <= index < grid.row_count:
        raise IndexError(f"Row index {index} out of range")
    updated = grid.model_copy(deep=True)
    updated.row_heights[index] = _size_value(height)
    return updated


def set_column_width(grid: TableGrid, index: int, width: Optional[int]) -> TableGrid:
    """Sets a column width in px; None or a non-positive value restores auto width."""
    if not 0 <= index < grid.column_count:
        raise IndexError(f"Column index {index} out of range")
    updated = grid.model_copy(deep=True)
    updated.column_widths[index] = _size_value(width)
    return updated


def set_cell_alignment(
    grid: TableGrid,
    cell_id: str,
    align: Union[VerticalAlign, str, None],
) -> TableGrid:
    """Sets (or clears, with None) the vertical alignment of one cell."""
    _find(grid, cell_id)
    updated = grid.model_copy(deep=True)
    _, _, cell = _find(updated, cell_id)
    cell.vertical_align = VerticalAlign(align) if align else None
    return updated


def update_cell(grid: TableGrid, cell_id: str, content: str) -> TableGrid:
    """Replaces the content of a cell that is not subsumed by a merge."""
    _, _, cell = _find(grid, cell_id)
    if cell.is_merged:
        raise InvalidSelection(f"Cell '{cell_id}' is merged and carries no content")
    updated = grid.model_copy(deep=True)
    _, _, cell = _find(updated, cell_id)
    cell.content = content
    return updated


# --- Merge & Split ---

def _selected(grid: TableGrid, selection: Iterable[str]) -> Optional[List[Tuple[int, int, TableCell]]]:
    wanted = set(selection)
    found = [
        (row_index, col_index, cell)
        for row_index, row in enumerate(grid.rows)
        for col_index, cell in enumerate(row.cells)
        if cell.id in wanted
    ]
    if len(found) != len(wanted):
        return None
    return found


def can_merge(grid: TableGrid, selection: Iterable[str]) -> bool:
    """True iff merge(grid, selection) would succeed."""
    positions = _selected(grid, selection)
    if not positions or len(positions) < 2:
        return False

    rows = [p[0] for p in positions]
    cols = [p[1] for p in positions]
    area = (max(rows) - min(rows) + 1) * (max(cols) - min(cols) + 1)
    if area != len(positions):
        return False

    return all(not cell.is_merged and not cell.is_master for _, _, cell in positions)


def can_split(grid: TableGrid, selection: Iterable[str]) -> bool:
    """True iff the selection is exactly one master cell carrying a span."""
    positions = _selected(grid, selection)
    if not positions or len(positions) != 1:
        return False
    return positions[0][2].is_master


def merge(grid: TableGrid, selection: Iterable[str]) -> TableGrid:
    """
    Merges a rectangular selection into its top-left cell.

    The master receives rowspan/colspan equal to the rectangle's extents and
    the space-joined non-empty contents of the selection in row-major order;
    every other selected cell is flagged merged and emptied.

    Raises:
        InvalidSelection: If can_merge(grid, selection) is False.
    """
    selection = set(selection)
    if not can_merge(grid, selection):
        raise InvalidSelection("Selection must be a rectangle of two or more unmerged cells")

    updated = grid.model_copy(deep=True)
    positions = _selected(updated, selection)
    top = min(p[0] for p in positions)
    left = min(p[1] for p in positions)
    bottom = max(p[0] for p in positions)
    right = max(p[1] for p in positions)

    master = updated.rows[top].cells[left]
    master.content = " ".join(cell.content for _, _, cell in positions if cell.content)
    master.rowspan = bottom - top + 1
    master.colspan = right - left + 1

    for row_index, col_index, cell in positions:
        if (row_index, col_index) == (top, left):
            continue
        cell.is_merged = True
        cell.content = ""
    return updated


def split(grid: TableGrid, cell_id: str) -> TableGrid:
    """
    Splits a master cell back into independent cells.

    Subsumed cells regain independent rendering with empty content; the
    master keeps its (concatenated) content and loses its span attributes.

    Raises:
        InvalidSelection: If the cell is unknown or carries no span.
    """
    if not can_split(grid, [cell_id]):
        raise InvalidSelection(f"Cell '{cell_id}' is not a merged master cell")

    updated = grid.model_copy(deep=True)
    top, left, master = _find(updated, cell_id)
    for row_index in range(top, top + (master.rowspan or 1)):
        for col_index in range(left, left + (master.colspan or 1)):
            if (row_index, col_index) != (top, left):
                updated.rows[row_index].cells[col_index].is_merged = False
    master.rowspan = None
    master.colspan = None
    return updated


# --- Diagnostics ---

def grid_violations(grid: TableGrid) -> List[str]:
    """
    Lists every broken grid invariant; an empty list means the grid is valid.

    Checks rectangularity, spans staying inside the grid, merged cells being
    covered by exactly one master, overlapping spans, and merged cells
    carrying content.
    """
    problems: List[str] = []
    widths = {len(row.cells) for row in grid.rows}
    if len(widths) > 1:
        return [f"rows have different lengths: {sorted(widths)}"]

    coverage: Dict[Position, int] = {}
    for row_index, col_index, cell in iter_masters(grid):
        if cell.is_merged:
            problems.append(f"master ({row_index}, {col_index}) is itself flagged merged")
        rows, cols = cell.rowspan or 1, cell.colspan or 1
        if row_index + rows > grid.row_count or col_index + cols > grid.column_count:
            problems.append(f"span of ({row_index}, {col_index}) leaves the grid")
            continue
        for r in range(row_index, row_index + rows):
            for c in range(col_index, col_index + cols):
                if (r, c) == (row_index, col_index):
                    continue
                coverage[(r, c)] = coverage.get((r, c), 0) + 1
                covered = grid.rows[r].cells[c]
                if not covered.is_merged:
                    problems.append(f"cell ({r}, {c}) inside span of ({row_index}, {col_index}) is not merged")
                if covered.is_master:
                    problems.append(f"spans of ({row_index}, {col_index}) and ({r}, {c}) overlap")

    for row_index, row in enumerate(grid.rows):
        for col_index, cell in enumerate(row.cells):
            if not cell.is_merged:
                continue
            count = coverage.get((row_index, col_index), 0)
            if count != 1:
                problems.append(f"merged cell ({row_index}, {col_index}) is covered by {count} masters")
            if cell.content:
                problems.append(f"merged cell ({row_index}, {col_index}) carries content")
    return problems
