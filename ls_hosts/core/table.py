"""Buffered writer that aligns tab-separated columns.

Cells are padded with tab characters to the next tab stop after the widest
cell of their column block, so the output stays tab-separated while lining
up in a terminal. A column block is a run of consecutive lines that all have
a cell in that column; the last cell of a line never belongs to a column.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from ls_hosts.constants import TABLE_MIN_WIDTH, TABLE_PADDING, TABLE_TAB_WIDTH


class TableWriter:
    """Collect table lines and write them aligned on flush.

    Nothing reaches the stream before :meth:`flush`.

    Parameters
    ----------
    stream : TextIO | None
        Output stream. If None, uses sys.stdout at flush time
    minwidth : int
        Minimal column width including padding
    tabwidth : int
        Width of a tab stop
    padding : int
        Padding added to the widest cell of a column
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        minwidth: int = TABLE_MIN_WIDTH,
        tabwidth: int = TABLE_TAB_WIDTH,
        padding: int = TABLE_PADDING,
    ) -> None:
        self.stream = stream
        self.minwidth = minwidth
        self.tabwidth = tabwidth
        self.padding = padding
        self._lines: list[list[str]] = []

    def write_line(self, text: str) -> None:
        """Buffer one line of tab-separated text."""
        self._lines.append(text.split("\t"))

    def write_row(self, values: Sequence[str]) -> None:
        """Buffer one row of cell values."""
        self.write_line("\t".join(values))

    @property
    def pending_lines(self) -> int:
        return len(self._lines)

    def render(self) -> str:
        """Return the aligned text for all buffered lines."""
        out: list[str] = []
        self._format(out, [], 0, len(self._lines))
        return "".join(out)

    def flush(self) -> None:
        """Write all buffered lines to the stream and clear the buffer."""
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(self.render())
        stream.flush()
        self._lines.clear()

    def _format(self, out: list[str], widths: list[int], line0: int, line1: int) -> None:
        column = len(widths)
        this = line0

        while this < line1:
            if column >= len(self._lines[this]) - 1:
                this += 1
                continue

            self._write_lines(out, widths, line0, this)
            line0 = this

            width = self.minwidth
            while this < line1:
                line = self._lines[this]
                if column >= len(line) - 1:
                    break
                width = max(width, len(line[column]) + self.padding)
                this += 1

            widths.append(width)
            self._format(out, widths, line0, this)
            widths.pop()
            line0 = this

        self._write_lines(out, widths, line0, line1)

    def _write_lines(self, out: list[str], widths: list[int], line0: int, line1: int) -> None:
        for line in self._lines[line0:line1]:
            for j, cell in enumerate(line):
                out.append(cell)
                if j < len(widths):
                    out.append(self._padding(len(cell), widths[j]))
            out.append("\n")

    def _padding(self, textw: int, cellw: int) -> str:
        if self.tabwidth == 0:
            return ""
        cellw = (cellw + self.tabwidth - 1) // self.tabwidth * self.tabwidth
        return "\t" * ((cellw - textw + self.tabwidth - 1) // self.tabwidth)
