"""Spreadsheet-style labels for rack slots (A1, B3, AA12)."""


def row_to_letters(row: int) -> str:
    """Convert a 0-based row index to letters: 0 -> A, 25 -> Z, 26 -> AA."""
    if row < 0:
        raise ValueError(f"row must be non-negative, got {row}")

    letters = ""
    n = row + 1
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def format_slot_label(row: int, col: int) -> str:
    """Label for the slot at 0-based ``row`` and ``col``; columns count from 1."""
    return f"{row_to_letters(row)}{col + 1}"


def slot_position(index: int, cols: int) -> tuple[int, int]:
    """Row and column of the ``index``-th slot in a rack with ``cols`` columns."""
    return index // cols, index % cols
