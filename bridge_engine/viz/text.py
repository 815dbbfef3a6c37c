from bridge_engine.core import keys

BRIDGE = "B"
EMPTY = "."
UNSUPPORTED = "HIGHER DIMENSIONS UNSUPPORTED"


def render(grid) -> str:
    """
    Text picture of a 1-D or 2-D grid, one " B" or " ." per cell.
    In 2-D the first axis runs along each line and the second axis down the lines.
    """
    dims = len(grid.lengths)
    if dims == 0:
        return ""
    if dims == 1:
        return _render_1d(grid)
    if dims == 2:
        return _render_2d(grid)
    return UNSUPPORTED


def _cell(grid, *coords) -> str:
    return " " + (BRIDGE if keys.encode(coords) in grid.occupied else EMPTY)


def _render_1d(grid) -> str:
    return "".join(_cell(grid, x) for x in range(grid.lengths[0]))


def _render_2d(grid) -> str:
    width, height = grid.lengths
    return "".join(
        "".join(_cell(grid, x, y) for x in range(width)) + "\n"
        for y in range(height)
    )
