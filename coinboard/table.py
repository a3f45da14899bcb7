"""Column-driven table rendering.

Callers describe a table once as a list of `Column` objects and hand any
sequence of rows to `render_table`. The result is a plain `Table` structure
that can be emitted as HTML or converted to a DataFrame.
"""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union

import pandas as pd
from markupsafe import Markup

from .templates import get_template

logger = logging.getLogger("table")

Row = TypeVar("Row")
RowKey = Union[str, int]


@dataclass(frozen=True)
class Column(Generic[Row]):
    """
    A header label paired with the function producing a row's cell.
    """

    header: Any
    cell: Callable[[Row], Any]
    header_class_name: Optional[str] = None
    cell_class_name: Optional[str] = None


@dataclass(frozen=True)
class HeaderCell:
    content: Any
    class_name: Optional[str] = None


@dataclass(frozen=True)
class BodyCell:
    content: Any
    class_name: Optional[str] = None


@dataclass(frozen=True)
class BodyRow:
    key: RowKey
    cells: List[BodyCell]


@dataclass(frozen=True)
class Table:
    """
    Structural output of `render_table`.

    `rows` keeps every input row in order, duplicates included; `row()`
    resolves a key to the last row carrying it through `rows_by_key`,
    which is built on first use.
    """

    header: List[HeaderCell]
    rows: List[BodyRow] = field(default_factory=list)
    table_class_name: Optional[str] = None
    header_row_class_name: Optional[str] = None
    body_row_class_name: Optional[str] = None

    @cached_property
    def rows_by_key(self) -> Dict[RowKey, BodyRow]:
        return {r.key: r for r in self.rows}

    def row(self, key: RowKey) -> BodyRow:
        return self.rows_by_key[key]

    def to_html(self) -> Markup:
        """
        Emit the table as HTML.

        Text content is escaped; content providing `__html__` (e.g. `Markup`)
        is written as-is.
        """

        return Markup(get_template("table.html").render(table=self))

    def to_frame(self) -> pd.DataFrame:
        """Cell contents as a DataFrame indexed by row key."""

        return pd.DataFrame(
            [[cell.content for cell in row.cells] for row in self.rows],
            index=pd.Index([row.key for row in self.rows], name="key"),
            columns=[str(cell.content) for cell in self.header],
        )


def _join_classes(*names: Optional[str]) -> Optional[str]:
    joined = " ".join(name for name in names if name)
    return joined or None


def render_table(
    rows: Sequence[Row],
    columns: Sequence[Column[Row]],
    row_key: Callable[[Row], RowKey],
    table_class_name: Optional[str] = None,
    header_row_class_name: Optional[str] = None,
    header_cell_class_name: Optional[str] = None,
    body_row_class_name: Optional[str] = None,
    body_cell_class_name: Optional[str] = None,
) -> Table:
    """
    Build a table with one header cell per column and one row per item.

    Args:
        rows: Row objects, rendered in the given order.
        columns: Column descriptors, rendered left to right.
        row_key: Returns the identity of a row. Keys should be unique;
            duplicates are kept and logged.
        table_class_name: Class for the table element.
        header_row_class_name: Class for the header row.
        header_cell_class_name: Class added to every header cell.
        body_row_class_name: Class for every body row.
        body_cell_class_name: Class added to every body cell.

    Returns:
        A `Table`. An empty `rows` gives a header-only table.

    Raises:
        Any exception raised by a column's cell function, unchanged.
    """

    header = [
        HeaderCell(
            content=column.header,
            class_name=_join_classes(header_cell_class_name, column.header_class_name),
        )
        for column in columns
    ]

    body: List[BodyRow] = []
    seen = set()
    for row in rows:
        key = row_key(row)
        if key in seen:
            logger.warning(f"Duplicate row key {key!r}; lookups by key return the last row")
        seen.add(key)

        cells = []
        for column in columns:
            try:
                content = column.cell(row)
            except Exception:
                logger.error(f"Cell function failed for row {key!r}, column {column.header!r}")
                raise
            cells.append(
                BodyCell(
                    content=content,
                    class_name=_join_classes(body_cell_class_name, column.cell_class_name),
                )
            )
        body.append(BodyRow(key=key, cells=cells))

    return Table(
        header=header,
        rows=body,
        table_class_name=table_class_name,
        header_row_class_name=header_row_class_name,
        body_row_class_name=body_row_class_name,
    )
