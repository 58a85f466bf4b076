"""
renderer/shapes.py — Vector primitives for the Flower Button window.

Everything on screen is drawn from polygons, no image assets:

    draw_cuboid()   a box with a lit top face and a shaded right face. The
                    isometric look comes from one depth offset `d` applied
                    up and to the right. The flower button is a cuboid whose
                    depth shrinks while it is held.
    draw_flower()   five petals around a core, drawn on the button's face.
    draw_panel()    a flat bordered rectangle (LCDs, the manual strip).

(x, y) is always the top-left of the front face.
"""

from __future__ import annotations
import math

import pygame

from settings import CUBOID_DEPTH

RGBColor = tuple[int, int, int]


def shade(color: RGBColor, amount: int) -> RGBColor:
    """Lighten (amount > 0) or darken (amount < 0) a color, clamped to 0..255."""
    return tuple(max(0, min(255, c + amount)) for c in color)


def draw_cuboid(
    surface: pygame.Surface,
    x: int,
    y: int,
    w: int,
    h: int,
    color: RGBColor,
    d: int = CUBOID_DEPTH,
    border_color: RGBColor | None = None,
) -> pygame.Rect:
    """Draw a box as front, top and right faces.

    Returns:
        The front face rect, for hit testing.
    """
    front = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    top   = [(x, y), (x + w, y), (x + w + d, y - d), (x + d, y - d)]
    right = [(x + w, y), (x + w + d, y - d), (x + w + d, y + h - d), (x + w, y + h)]

    if d > 0:
        pygame.draw.polygon(surface, shade(color, 40), top)
        pygame.draw.polygon(surface, shade(color, -40), right)
    pygame.draw.polygon(surface, color, front)

    if border_color is not None:
        for face in (front, top, right) if d > 0 else (front,):
            pygame.draw.polygon(surface, border_color, face, 1)

    return pygame.Rect(x, y, w, h)


def draw_flower(
    surface: pygame.Surface,
    center: tuple[int, int],
    radius: int,
    petal_color: RGBColor,
    core_color: RGBColor,
    petals: int = 5,
) -> None:
    """Draw petals as circles on a ring around a round core."""
    cx, cy = center
    petal_r = max(2, radius // 2)
    ring = radius - petal_r
    for i in range(petals):
        angle = -math.pi / 2 + i * 2 * math.pi / petals
        px = cx + int(ring * math.cos(angle))
        py = cy + int(ring * math.sin(angle))
        pygame.draw.circle(surface, petal_color, (px, py), petal_r)
        pygame.draw.circle(surface, shade(petal_color, -50), (px, py), petal_r, 1)
    pygame.draw.circle(surface, core_color, center, max(2, radius // 3))


def draw_panel(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor,
    border_color: RGBColor | None = None,
    border_width: int = 2,
) -> None:
    pygame.draw.rect(surface, color, rect)
    if border_color is not None:
        pygame.draw.rect(surface, border_color, rect, border_width)
