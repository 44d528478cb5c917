"""
renderer/ui.py — Screen layout and drawing for Click Speed Test.

Screen, top to bottom:
    - Title bar
    - Stat panels: Time / Clicks / Best
    - Duration chip ("5s"), cycles through DURATION_CHOICES
    - The big CLICK! button
    - Status message and result line
    - Start / Restart buttons

layout() is the single source of hit rects. game.py uses it for input
and draw_screen() uses it for drawing, so a click can be routed before
the first frame has rendered.

All draw functions are stateless: they take explicit data arguments.
"""

from __future__ import annotations
from functools import lru_cache
from typing import NamedTuple

import pygame

from core.controller import DisplayState
from core.session import SessionStatus
from renderer.widgets import draw_button, draw_flat
from settings import (
    SCREEN_W, SCREEN_H, TITLE,
    HEADER_H, STAT_PANEL_H, STAT_GAP, MARGIN, CLICK_BTN_H, CONTROL_BTN_H, CHIP_W,
    COLOR,
    FONT_FAMILY, FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)


class Layout(NamedTuple):
    """Hit rects in native game coordinates."""
    stats:   tuple[pygame.Rect, pygame.Rect, pygame.Rect]
    chip:    pygame.Rect
    click:   pygame.Rect
    message: pygame.Rect
    start:   pygame.Rect
    restart: pygame.Rect


@lru_cache(maxsize=1)
def layout() -> Layout:
    """Compute the fixed screen layout."""
    inner_w = SCREEN_W - MARGIN * 2

    stat_w = (inner_w - STAT_GAP * 2) // 3
    stat_y = HEADER_H + 16
    stats = tuple(
        pygame.Rect(MARGIN + i * (stat_w + STAT_GAP), stat_y, stat_w, STAT_PANEL_H)
        for i in range(3)
    )

    chip_y = stat_y + STAT_PANEL_H + 14
    chip = pygame.Rect(SCREEN_W - MARGIN - CHIP_W, chip_y, CHIP_W, 32)

    click_y = chip.bottom + 22
    click = pygame.Rect(MARGIN, click_y, inner_w - 8, CLICK_BTN_H)

    control_y = SCREEN_H - CONTROL_BTN_H - 20
    message = pygame.Rect(MARGIN, click.bottom + 14, inner_w, control_y - click.bottom - 24)

    half_w = (inner_w - STAT_GAP) // 2
    start   = pygame.Rect(MARGIN, control_y, half_w - 8, CONTROL_BTN_H)
    restart = pygame.Rect(MARGIN + half_w + STAT_GAP, control_y, half_w - 8, CONTROL_BTN_H)

    return Layout(stats, chip, click, message, start, restart)  # type: ignore[arg-type]


# ── Font cache ────────────────────────────────────────────────────────────────
# pygame.font.SysFont falls back to the default font if "couriernew" is missing.
_fonts: dict[int, pygame.font.Font] = {}


def _font(size: int) -> pygame.font.Font:
    if size not in _fonts:
        _fonts[size] = pygame.font.SysFont(FONT_FAMILY, size)
    return _fonts[size]


def _wrap(text: str, font: pygame.font.Font, max_w: int) -> list[str]:
    """Greedy word wrap to fit max_w pixels."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and font.size(candidate)[0] > max_w:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


# ── Sections ──────────────────────────────────────────────────────────────────

def draw_header(surface: pygame.Surface) -> None:
    """Draw the title bar."""
    draw_flat(surface, pygame.Rect(0, 0, SCREEN_W, HEADER_H), COLOR["chrome"], None)
    title = _font(FONT_SIZE_LG).render(TITLE, True, COLOR["text_light"])
    surface.blit(title, (MARGIN, (HEADER_H - title.get_height()) // 2))


def draw_stats(surface: pygame.Surface, state: DisplayState, rects) -> None:
    """Draw the Time / Clicks / Best panels.

    Args:
        surface: Native game surface.
        state:   Current display snapshot.
        rects:   Three panel rects from layout().stats.
    """
    entries = (
        ("TIME",   f"{state.remaining_text}s", COLOR["timer"] if state.click_enabled else COLOR["text"]),
        ("CLICKS", str(state.click_count),     COLOR["text"]),
        ("BEST",   str(state.high_score),      COLOR["good"]),
    )
    for rect, (label, value, color) in zip(rects, entries):
        draw_flat(surface, rect, COLOR["panel"])
        lab = _font(FONT_SIZE_SM).render(label, True, COLOR["chrome"])
        surface.blit(lab, (rect.x + 8, rect.y + 6))
        val = _font(FONT_SIZE_XL).render(value, True, color)
        surface.blit(val, (rect.centerx - val.get_width() // 2, rect.bottom - val.get_height() - 6))


def draw_duration_chip(surface: pygame.Surface, rect: pygame.Rect, seconds: float, focused: bool) -> None:
    """Draw the "Duration" label and the chip showing the selected value."""
    label = _font(FONT_SIZE_MD).render("Duration", True, COLOR["text"])
    surface.blit(label, (MARGIN, rect.centery - label.get_height() // 2))
    text = f"{seconds:g}s  >"
    draw_button(surface, rect, text, _font(FONT_SIZE_MD),
                focused=focused, color=COLOR["chrome"])


def draw_click_button(surface: pygame.Surface, rect: pygame.Rect, enabled: bool,
                      focused: bool, pressed: bool) -> None:
    """Draw the big CLICK! button."""
    draw_button(surface, rect, "CLICK!", _font(FONT_SIZE_XL),
                enabled=enabled, focused=focused, pressed=pressed)


def draw_message(surface: pygame.Surface, rect: pygame.Rect, state: DisplayState) -> None:
    """Draw the wrapped status message and the result line below it."""
    font = _font(FONT_SIZE_SM)
    y = rect.y
    for line in _wrap(state.message, font, rect.width):
        surf = font.render(line, True, COLOR["text"])
        surface.blit(surf, (rect.centerx - surf.get_width() // 2, y))
        y += surf.get_height() + 2

    if state.result_text:
        result = _font(FONT_SIZE_LG).render(state.result_text, True, COLOR["accent"])
        surface.blit(result, (rect.centerx - result.get_width() // 2, y + 8))


def draw_controls(surface: pygame.Surface, start: pygame.Rect, restart: pygame.Rect,
                  status: SessionStatus) -> None:
    """Draw Start (enabled only when idle) and Restart."""
    font = _font(FONT_SIZE_LG)
    draw_button(surface, start, "START", font,
                enabled=status is SessionStatus.IDLE, color=COLOR["good"])
    draw_button(surface, restart, "RESTART", font, color=COLOR["chrome"])


# ── Public entry point ────────────────────────────────────────────────────────

def draw_screen(
    surface: pygame.Surface,
    state: DisplayState,
    duration_s: float,
    focus: str | None,
    pressed: bool,
) -> None:
    """Draw a full frame.

    Args:
        surface:    Native 360x560 game surface.
        state:      Latest DisplayState from the controller.
        duration_s: Currently selected duration for the chip.
        focus:      "chip", "click" or None.
        pressed:    True while click press feedback is active.
    """
    rects = layout()
    surface.fill(COLOR["background"])
    draw_header(surface)
    draw_stats(surface, state, rects.stats)
    draw_duration_chip(surface, rects.chip, duration_s, focused=focus == "chip")
    draw_click_button(surface, rects.click, enabled=state.click_enabled,
                      focused=focus == "click", pressed=pressed)
    draw_message(surface, rects.message, state)
    draw_controls(surface, rects.start, rects.restart, state.status)
