# tiny_runner/game/render.py
from __future__ import annotations
import math
import random
from typing import Optional, Tuple

import pygame

from .config import (
    WIDTH, HEIGHT, COUNTDOWN_TICK_S, WorldConfig, default_world,
    COLOR_BG, COLOR_FG, COLOR_GROUND, COLOR_PLAYER, COLOR_BLUSH, COLOR_EYE,
    COLOR_OBSTACLE, COLOR_FLYER,
)
from .obstacles import FLYING
from .session import GameState, Snapshot

N_STARS = 80


class Renderer:
    """Paints a Snapshot. Never touches the live session."""
    def __init__(self, surface: pygame.Surface, world: Optional[WorldConfig] = None,
                 rng: Optional[random.Random] = None):
        self.surface = surface
        self.ground_line = (world or default_world()).ground_line
        self.rng = rng or random.Random()
        self.canvas = pygame.Surface(surface.get_size())
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = pygame.font.SysFont("jetbrainsmono", 18)
        self.font_big = pygame.font.SysFont("jetbrainsmono", 40, bold=True)
        self.font_huge = pygame.font.SysFont("jetbrainsmono", 64, bold=True)

    def draw(self, snap: Snapshot):
        surf = self.canvas
        surf.fill(COLOR_BG)
        self._draw_stars(surf, snap.elapsed)

        ground_y = int(self.ground_line)
        pygame.draw.rect(surf, COLOR_GROUND, (0, ground_y, WIDTH, 4))

        self._draw_player(surf, snap)

        for ob in snap.obstacles:
            color = COLOR_FLYER if ob.kind == FLYING else COLOR_OBSTACLE
            r = pygame.Rect(int(ob.x), int(ob.y), max(1, int(ob.w)), max(1, int(ob.h)))
            pygame.draw.rect(surf, color, r, border_radius=min(8, r.w // 2, r.h // 2))

        surf.blit(self.font.render("Tiny Runner", True, COLOR_FG), (16, 14))
        hud = f"Score: {snap.score}   Best: {snap.best}" + ("   [muted]" if snap.muted else "")
        surf.blit(self.font.render(hud, True, (170, 180, 205)), (16, 38))

        if snap.state is GameState.COUNTDOWN:
            self._overlay(surf, 90)
            n = math.ceil(snap.countdown / COUNTDOWN_TICK_S)
            self._center_text(surf, self.font_huge, str(n), -20)
            self._center_text(surf, self.font, "Get ready…", 34)
        elif snap.state is GameState.PAUSED:
            self._overlay(surf, 115)
            self._center_text(surf, self.font_big, "Paused", 0)
        elif snap.state is GameState.GAME_OVER:
            self._overlay(surf, 140)
            self._center_text(surf, self.font_big, "Game Over", -30)
            self._center_text(surf, self.font, "Press Space or click to try again.", 10)
        elif snap.state is GameState.IDLE:
            self._overlay(surf, 140)
            self._center_text(surf, self.font_big, "Tiny Runner", -30)
            self._center_text(surf, self.font, "Space / click to start   P pause   M mute", 10)

        sx, sy = self._shake_offset(snap)
        self.surface.fill(COLOR_BG)
        self.surface.blit(surf, (sx, sy))

    def _shake_offset(self, snap: Snapshot) -> Tuple[int, int]:
        if snap.running or snap.shake <= 0.0:
            return 0, 0
        return (int(self.rng.uniform(-8, 8) * snap.shake * 4),
                int(self.rng.uniform(-6, 6) * snap.shake * 4))

    def _draw_stars(self, surf: pygame.Surface, t: float):
        for i in range(N_STARS):
            px = (i * 97.3 + t * 18) % WIDTH
            py = (i * 53.1 + t * 6) % (HEIGHT * 0.7)
            r = (i % 3) + 0.7
            shade = int(255 * (0.08 + (i % 5) * 0.03))
            pygame.draw.circle(surf, (shade, shade, min(255, shade + 8)),
                               (int(WIDTH - px), int(py)), max(1, int(r)))

    def _draw_player(self, surf: pygame.Surface, snap: Snapshot):
        p = snap.player
        body = pygame.Rect(int(p.x), int(p.y), int(p.w), int(p.h))
        pygame.draw.rect(surf, COLOR_PLAYER, body, border_radius=12)
        pygame.draw.circle(surf, COLOR_BLUSH, (int(p.x + p.w * 0.28), int(p.y + p.h * 0.50)), 8)
        pygame.draw.circle(surf, COLOR_EYE, (int(p.x + p.w * 0.68), int(p.y + p.h * 0.32)), 4)
        pygame.draw.circle(surf, (255, 255, 255), (int(p.x + p.w * 0.73), int(p.y + p.h * 0.27)), 1)

    def _overlay(self, surf: pygame.Surface, alpha: int):
        panel = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        panel.fill((0, 0, 0, alpha))
        surf.blit(panel, (0, 0))

    def _center_text(self, surf: pygame.Surface, font: pygame.font.Font, msg: str, dy: int):
        img = font.render(msg, True, COLOR_FG)
        surf.blit(img, (WIDTH // 2 - img.get_width() // 2, HEIGHT // 2 - img.get_height() // 2 + dy))
