"""
Utility functions
"""

import importlib.metadata


def _version(default_version="0.0.0"):
    try:
        return importlib.metadata.version("testsieve")
    except importlib.metadata.PackageNotFoundError:
        return default_version

TESTSIEVE_VERSION = _version()


def count_noun(n: int, singular: str, plural: str) -> str:
    """
    Format a count together with the right form of its noun, e.g. "1 test", "2 tests".
    """
    return f'{ n } { singular if n == 1 else plural }'


def align_right_columns(lines: list[str], padding: int = 2) -> list[str]:
    """
    Lay out tab-separated lines as right-aligned columns.

    Every tab-terminated cell is padded on the left to the widest cell of its column plus
    `padding`. Whatever follows the last tab of a line is not part of a column and is
    appended as-is.
    """
    rows : list[tuple[list[str], str]] = []
    for line in lines:
        *cells, trailing = line.split('\t')
        rows.append((cells, trailing))

    n_columns = max((len(cells) for cells, _ in rows), default=0)
    widths = [ 0 ] * n_columns
    for cells, _ in rows:
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], len(cell) + padding)

    ret = []
    for cells, trailing in rows:
        ret.append(''.join( cell.rjust(widths[i]) for i, cell in enumerate(cells) ) + trailing)
    return ret
