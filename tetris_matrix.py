
"""Fixed-size integer grids: field, next preview, render buffer"""
from typing import List


class Matrix:
    """Zero-initialised rows x cols grid of ints, addressed as m[y][x]."""

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._data: List[List[int]] = [[0] * cols for _ in range(rows)]

    def __getitem__(self, y: int) -> List[int]:
        return self._data[y]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return self.rows

    @property
    def released(self) -> bool:
        return self._data is None

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def fill(self, value: int = 0):
        for row in self._data:
            row[:] = [value] * self.cols

    def copy_from(self, other: "Matrix"):
        for y in range(self.rows):
            self._data[y][:] = other[y]

    def is_row_full(self, y: int) -> bool:
        return all(self._data[y])

    def clear_row(self, y: int):
        self._data[y][:] = [0] * self.cols

    def collapse_onto(self, y: int):
        """Shift every row above y down by one; row 0 becomes empty."""
        for row in range(y, 0, -1):
            self._data[row][:] = self._data[row - 1]
        self.clear_row(0)

    def to_lists(self) -> List[List[int]]:
        return [row[:] for row in self._data]

    def release(self):
        self._data = None
