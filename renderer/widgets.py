"""
renderer/widgets.py — Vector widget primitives for Click Speed Test.

Every interactive element is drawn from two primitives:
    - a cuboid: raised, clickable (front face + lighter top + darker right)
    - a flat tile: inert or disabled

The isometric illusion is a single depth offset `d` applied up and to the
right of the front face. No images, no sprites.

Coordinate system:
    Rects describe the FRONT face in native 360x560 game space.
"""

from __future__ import annotations
import pygame

from settings import COLOR, CUBOID_DEPTH

RGBColor = tuple[int, int, int]


def shade(color: RGBColor, amount: int) -> RGBColor:
    """Shift every channel by amount, clamped to 0–255.

    Positive amounts lighten (top faces), negative darken (right faces).
    """
    return tuple(max(0, min(255, c + amount)) for c in color)  # type: ignore[return-value]


def draw_cuboid(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor,
    d: int = CUBOID_DEPTH,
) -> None:
    """Draw a filled isometric cuboid whose front face is rect.

    Args:
        surface: Surface to draw onto.
        rect:    Front face.
        color:   Front face color; top/right faces are derived from it.
        d:       Depth offset in pixels. 0 draws only the front face.
    """
    x, y, w, h = rect
    if d > 0:
        top   = [(x, y), (x + w, y), (x + w + d, y - d), (x + d, y - d)]
        right = [(x + w, y), (x + w + d, y - d), (x + w + d, y + h - d), (x + w, y + h)]
        pygame.draw.polygon(surface, shade(color, 40), top)
        pygame.draw.polygon(surface, shade(color, -40), right)
    pygame.draw.rect(surface, color, rect)


def draw_flat(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor,
    border_color: RGBColor | None = COLOR["panel_border"],
) -> None:
    """Draw a flat rectangle with an optional 1px border."""
    pygame.draw.rect(surface, color, rect)
    if border_color is not None:
        pygame.draw.rect(surface, border_color, rect, 1)


def draw_button(
    surface: pygame.Surface,
    rect: pygame.Rect,
    label: str,
    font: pygame.font.Font,
    *,
    enabled: bool = True,
    focused: bool = False,
    pressed: bool = False,
    color: RGBColor = COLOR["primary"],
) -> None:
    """Draw a labelled button in one of its visual states.

    Disabled buttons are flat and grey. A pressed button sinks: its front
    face moves into the space the depth faces normally occupy. A focused
    button gets an accent outline.

    Args:
        surface: Target surface.
        rect:    Hit rect (front face at rest).
        label:   Centered text.
        font:    Font for the label.
        enabled: Draw as clickable.
        focused: Draw keyboard focus outline.
        pressed: Draw sunk in (press feedback).
        color:   Front face color when enabled.
    """
    if not enabled:
        draw_flat(surface, rect, COLOR["disabled"])
        text_color = COLOR["chrome"]
        face = rect
    elif pressed:
        face = rect.move(CUBOID_DEPTH // 2, -(CUBOID_DEPTH // 2))
        draw_cuboid(surface, face, shade(color, -20), d=CUBOID_DEPTH // 2)
        text_color = COLOR["text_light"]
    else:
        face = rect
        draw_cuboid(surface, face, color)
        text_color = COLOR["text_light"]

    if focused:
        pygame.draw.rect(surface, COLOR["accent"], face.inflate(6, 6), 2)

    text = font.render(label, True, text_color)
    surface.blit(text, text.get_rect(center=face.center))
