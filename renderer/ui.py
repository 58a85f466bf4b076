"""
renderer/ui.py — Window rendering for Flower Button.

Draws everything the player sees:
    - Bomb timer strip (countdown or sapped readout, strike count)
    - Module panels: flower button, two-digit LCD, status light
    - Manual strip with key hints, and the full manual overlay
    - Distortion overlay (wobble + tint)
    - End banner (exploded / defused)

All functions are stateless: they take explicit data and draw to the given
surface. Layout helpers (module_rects, button_rect) are shared with game.py
for hit testing so drawing and input always agree.

Coordinate system: native SCREEN_W x SCREEN_H.
"""

from __future__ import annotations
import math

import pygame

from settings import (
    SCREEN_W, SCREEN_H,
    BOMB_TIMER_H, MODULE_W, MODULE_H, MODULE_GAP, MANUAL_H,
    COLOR,
    FONT_FAMILY, FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
    CUBOID_DEPTH, BUTTON_PRESSED_DEPTH,
    DISTORTION_MAX_PX, DISTORTION_TINT_ALPHA, DISTORTION_BAND_H,
)
from renderer.shapes import draw_cuboid, draw_flower, draw_panel, shade, RGBColor

# ── Font cache ────────────────────────────────────────────────────────────────
# SysFont falls back to pygame's default font when couriernew is missing.
_fonts: dict[tuple[int, bool], pygame.font.Font] = {}


def _font(size: int, bold: bool = False) -> pygame.font.Font:
    key = (size, bold)
    if key not in _fonts:
        _fonts[key] = pygame.font.SysFont(FONT_FAMILY, size, bold=bold)
    return _fonts[key]


def _blit_centered(surface: pygame.Surface, text: pygame.Surface, center: tuple[int, int]) -> None:
    surface.blit(text, text.get_rect(center=center))


# ── Layout ────────────────────────────────────────────────────────────────────

def module_rects(count: int) -> list[pygame.Rect]:
    """Return module panel rects, centred side by side below the bomb timer.

    Args:
        count: Number of modules on the bomb.
    """
    total_w = count * MODULE_W + (count - 1) * MODULE_GAP
    x0 = (SCREEN_W - total_w) // 2
    top = BOMB_TIMER_H + (SCREEN_H - BOMB_TIMER_H - MANUAL_H - MODULE_H) // 2
    return [
        pygame.Rect(x0 + i * (MODULE_W + MODULE_GAP), top, MODULE_W, MODULE_H)
        for i in range(count)
    ]


def button_rect(module: pygame.Rect) -> pygame.Rect:
    """Front face of the flower button inside a module panel."""
    size = MODULE_W // 2
    return pygame.Rect(module.centerx - size // 2, module.top + 96, size, size - 8)


def _lcd_rect(module: pygame.Rect) -> pygame.Rect:
    return pygame.Rect(module.centerx - 44, module.top + 24, 88, 56)


def _light_center(module: pygame.Rect) -> tuple[int, int]:
    return module.right - 18, module.top + 18


# ── Bomb timer ────────────────────────────────────────────────────────────────

def draw_bomb_timer(
    surface: pygame.Surface,
    readout: str,
    strikes: int,
    zen_mode: bool = False,
    sapped: bool = False,
) -> None:
    """Draw the bomb's timer strip.

    Args:
        readout:  Text on the timer, either the countdown or the sapped readout.
        strikes:  Strikes on the bomb.
        zen_mode: Show the zen marker (timer counts up).
        sapped:   True while a module overrides the readout. The LCD dims.
    """
    draw_panel(surface, pygame.Rect(0, 0, SCREEN_W, BOMB_TIMER_H), COLOR["bomb_casing"])

    lcd = pygame.Rect(SCREEN_W // 2 - 130, 14, 260, BOMB_TIMER_H - 28)
    draw_panel(surface, lcd, COLOR["lcd_back"], COLOR["module_border"])
    text_color = shade(COLOR["timer_text"], -60) if sapped else COLOR["timer_text"]
    _blit_centered(surface, _font(FONT_SIZE_XL, bold=True).render(readout, True, text_color), lcd.center)

    label = f"STRIKES {strikes}"
    strikes_surf = _font(FONT_SIZE_MD).render(label, True, COLOR["light_strike"] if strikes else COLOR["text_dim"])
    surface.blit(strikes_surf, (SCREEN_W - strikes_surf.get_width() - 16, 16))

    if zen_mode:
        zen = _font(FONT_SIZE_SM).render("ZEN", True, COLOR["text_dim"])
        surface.blit(zen, (16, 16))


# ── Module ────────────────────────────────────────────────────────────────────

def draw_module(
    surface: pygame.Surface,
    rect: pygame.Rect,
    countdown_text: str,
    light_color: RGBColor,
    flash: tuple[RGBColor | None, float],
    pressed: bool,
    hotkey: str = "",
) -> None:
    """Draw one flower button module.

    Args:
        rect:           Module panel rect from module_rects().
        countdown_text: Two characters for the module LCD.
        light_color:    Status light base color.
        flash:          (strike color or None, alpha) from StatusLight.flash_state().
        pressed:        True while the button is held down.
        hotkey:         Key label printed under the button.
    """
    draw_cuboid(surface, rect.x, rect.y, rect.w, rect.h, COLOR["module_face"],
                d=CUBOID_DEPTH, border_color=COLOR["module_border"])

    # Module LCD
    lcd = _lcd_rect(rect)
    draw_panel(surface, lcd, COLOR["lcd_back"], COLOR["module_border"])
    _blit_centered(surface, _font(FONT_SIZE_LG, bold=True).render(countdown_text, True, COLOR["lcd_text"]), lcd.center)

    # Status light, strike flash drawn over it
    center = _light_center(rect)
    pygame.draw.circle(surface, light_color, center, 10)
    flash_color, alpha = flash
    if flash_color is not None and alpha > 0.0:
        glow = pygame.Surface((28, 28), pygame.SRCALPHA)
        pygame.draw.circle(glow, (*flash_color, int(alpha * 255)), (14, 14), 12)
        surface.blit(glow, (center[0] - 14, center[1] - 14))
    pygame.draw.circle(surface, COLOR["module_border"], center, 10, 1)

    # Flower button: sinks while held
    button = button_rect(rect)
    depth = BUTTON_PRESSED_DEPTH if pressed else CUBOID_DEPTH
    sink = CUBOID_DEPTH - depth
    front = draw_cuboid(surface, button.x + sink, button.y - sink + CUBOID_DEPTH, button.w, button.h - CUBOID_DEPTH,
                        shade(COLOR["button"], -30), d=depth)
    draw_flower(surface, front.center, min(front.w, front.h) // 2 - 4, COLOR["button"], COLOR["button_core"])

    if hotkey:
        key = _font(FONT_SIZE_SM).render(hotkey, True, COLOR["module_border"])
        _blit_centered(surface, key, (rect.centerx, rect.bottom - 12))


# ── Manual ────────────────────────────────────────────────────────────────────

def draw_manual_strip(surface: pygame.Surface, hint: str) -> None:
    strip = pygame.Rect(0, SCREEN_H - MANUAL_H, SCREEN_W, MANUAL_H)
    draw_panel(surface, strip, COLOR["bomb_casing"])
    lines = hint.split("\n")
    font = _font(FONT_SIZE_SM)
    for i, line in enumerate(lines):
        surface.blit(font.render(line, True, COLOR["text"]), (16, strip.top + 12 + i * 18))


def draw_manual(surface: pygame.Surface, rows: list[tuple[int, str, str, str, int]]) -> None:
    """Draw the digit legend over the whole window.

    Args:
        rows: (digit, subject, verb, object, additional digit) from
              rules.manual.legend_rows().
    """
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill((20, 20, 20, 230))
    surface.blit(overlay, (0, 0))

    title = _font(FONT_SIZE_LG, bold=True).render("MANUAL", True, COLOR["text"])
    _blit_centered(surface, title, (SCREEN_W // 2, 36))

    font = _font(FONT_SIZE_SM)
    columns = ("#", "MM: subject", "MM: verb", "SS: object", "SS: extra")
    xs = (40, 80, 280, 430, 600)
    y = 72
    for x, heading in zip(xs, columns):
        surface.blit(font.render(heading, True, COLOR["button_core"]), (x, y))
    for digit, subject, verb, obj, extra in rows:
        y += 26
        cells = (str(digit), subject, verb, obj or "-", str(extra))
        for x, cell in zip(xs, cells):
            surface.blit(font.render(cell, True, COLOR["text"]), (x, y))

    foot = font.render("Release when the module's number fits the rule. M closes.", True, COLOR["text_dim"])
    _blit_centered(surface, foot, (SCREEN_W // 2, SCREEN_H - 28))


# ── Distortion ────────────────────────────────────────────────────────────────

def draw_distortion(surface: pygame.Surface, strength: float, tint: float, phase: float) -> None:
    """Wobble horizontal slices of the frame and tint it.

    Args:
        strength: Wobble strength, 0..1.
        tint:     Tint strength, 0..1.
        phase:    Wobble time from core/distortion.py.
    """
    if strength > 0.0:
        frame = surface.copy()
        surface.fill(COLOR["background"])
        amplitude = strength * DISTORTION_MAX_PX
        for y in range(0, SCREEN_H, DISTORTION_BAND_H):
            dx = int(math.sin(phase * 3.0 + y * 0.05) * amplitude)
            band = pygame.Rect(0, y, SCREEN_W, min(DISTORTION_BAND_H, SCREEN_H - y))
            surface.blit(frame, (dx, y), band)

    if tint > 0.0:
        overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
        overlay.fill((*COLOR["tint"], int(tint * DISTORTION_TINT_ALPHA)))
        surface.blit(overlay, (0, 0))


# ── End banner ────────────────────────────────────────────────────────────────

def draw_banner(surface: pygame.Surface, title: str, subtitle: str, color: RGBColor) -> None:
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill((20, 20, 20, 190))
    surface.blit(overlay, (0, 0))

    cy = SCREEN_H // 2
    _blit_centered(surface, _font(FONT_SIZE_XL, bold=True).render(title, True, color), (SCREEN_W // 2, cy - 20))
    _blit_centered(surface, _font(FONT_SIZE_MD).render(subtitle, True, COLOR["text"]), (SCREEN_W // 2, cy + 30))
