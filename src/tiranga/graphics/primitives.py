"""Basic drawing primitives for numpy RGB buffers."""

from typing import Tuple, Optional
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[int, int]
Buffer = NDArray[np.uint8]

# Height of the built-in bitmap font, in unscaled pixels
FONT_HEIGHT = 5


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a circle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw outline only
        thickness: Outline thickness (when filled=False)
    """
    if radius < 0:
        return

    h, w = buffer.shape[:2]

    if filled:
        # Distance-based mask
        y_indices, x_indices = np.ogrid[:h, :w]
        dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
        mask = dist_sq <= radius ** 2
        buffer[mask] = color
    elif thickness > 1:
        # Ring mask centered on the radius
        y_indices, x_indices = np.ogrid[:h, :w]
        dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
        inner = max(0.0, radius - thickness / 2)
        outer = radius + thickness / 2
        mask = (dist_sq >= inner ** 2) & (dist_sq <= outer ** 2)
        buffer[mask] = color
    else:
        # Bresenham's circle algorithm for outline
        x = 0
        y = radius
        d = 3 - 2 * radius

        def plot_circle_points(px: int, py: int) -> None:
            points = [
                (cx + px, cy + py), (cx - px, cy + py),
                (cx + px, cy - py), (cx - px, cy - py),
                (cx + py, cy + px), (cx - py, cy + px),
                (cx + py, cy - px), (cx - py, cy - px),
            ]
            for point_x, point_y in points:
                if 0 <= point_x < w and 0 <= point_y < h:
                    buffer[point_y, point_x] = color

        while y >= x:
            plot_circle_points(x, y)
            x += 1
            if d > 0:
                y -= 1
                d = d + 4 * (x - y) + 10
            else:
                d = d + 4 * x + 6


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line, both endpoints inclusive.

    Axis-aligned lines are drawn with slicing; everything else uses
    Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]
    lo = -(thickness // 2)
    hi = (thickness + 1) // 2

    if x1 == x2 or y1 == y2:
        left, right = sorted((x1, x2))
        top, bottom = sorted((y1, y2))
        xa = max(0, left + lo)
        xb = min(w, right + hi)
        ya = max(0, top + lo)
        yb = min(h, bottom + hi)
        if xa < xb and ya < yb:
            buffer[ya:yb, xa:xb] = color
        return

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        # Draw point with thickness
        for tx in range(lo, hi):
            for ty in range(lo, hi):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw
        x: Starting x coordinate
        y: Top y coordinate
        color: RGB color tuple
        font: Bitmap font dictionary (char -> 2D array). Uses built-in if None.
        scale: Scale factor for font size

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _get_default_font()

    h, w = buffer.shape[:2]
    cursor_x = x
    char_height = FONT_HEIGHT * scale

    for char in text:
        if char == ' ' or char == '\t':
            cursor_x += 4 * scale
            continue

        char_data = font.get(char.upper(), font.get('?', []))
        if not char_data:
            cursor_x += 4 * scale
            continue

        char_width = len(char_data[0])

        for row_idx, row in enumerate(char_data):
            for col_idx, pixel in enumerate(row):
                if pixel:
                    for sy in range(scale):
                        for sx in range(scale):
                            px = cursor_x + col_idx * scale + sx
                            py = y + row_idx * scale + sy
                            if 0 <= px < w and 0 <= py < h:
                                buffer[py, px] = color

        cursor_x += (char_width + 1) * scale

    return cursor_x - x, char_height


def _get_default_font() -> dict:
    """Return a simple 3x5 bitmap font for basic characters."""
    # Each character is a list of rows, each row is a list of 0/1 pixels
    return {
        'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
        'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
        'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
        'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
        'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
        'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
        'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
        'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
        'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
        'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
        'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
        'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
        'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
        'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
        'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
        'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
        'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
        'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
        'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
        'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
        'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
        'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
        'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
        'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
        '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
        '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
        '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
        '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
        '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
        '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
        '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
        '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
        '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
        '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
        '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
        '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
        ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
        ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
        '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
        '_': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [1,1,1]],
        '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
        '=': [[0,0,0], [1,1,1], [0,0,0], [1,1,1], [0,0,0]],
        '*': [[0,0,0], [1,0,1], [0,1,0], [1,0,1], [0,0,0]],
        '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
        '(': [[0,1,0], [1,0,0], [1,0,0], [1,0,0], [0,1,0]],
        ')': [[0,1,0], [0,0,1], [0,0,1], [0,0,1], [0,1,0]],
        '[': [[1,1,0], [1,0,0], [1,0,0], [1,0,0], [1,1,0]],
        ']': [[0,1,1], [0,0,1], [0,0,1], [0,0,1], [0,1,1]],
        '"': [[1,0,1], [1,0,1], [0,0,0], [0,0,0], [0,0,0]],
        "'": [[0,1,0], [0,1,0], [0,0,0], [0,0,0], [0,0,0]],
    }
