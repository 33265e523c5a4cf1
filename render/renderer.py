# render/renderer.py
import os, logging
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame
from config import PageConfig, RollConfig
from render.geometry import RollLayout

WHITE_SET = {0, 2, 4, 5, 7, 9, 11}
HEADER_H = 0.4  # inches reserved above the roll for the caption

class PageRenderer:
    """Draws one roll layout onto a single off-screen page and saves it."""
    def __init__(self, cfg: PageConfig, roll: RollConfig):
        self.cfg = cfg
        self.roll = roll
        self.font = None

    def px(self, inches: float) -> int:
        return int(round(inches * self.cfg.dpi))

    def page_size(self, layout: RollLayout) -> tuple[int, int]:
        w = layout.width + self.roll.column_pitch + 2 * self.cfg.margin
        h = layout.length + 2 * self.cfg.margin + HEADER_H
        return max(1, self.px(w)), max(1, self.px(h))

    def _origin(self) -> tuple[int, int]:
        return self.px(self.cfg.margin + self.roll.column_pitch / 2), self.px(self.cfg.margin + HEADER_H)

    def draw(self, layout: RollLayout, caption: str = "") -> pygame.Surface:
        w, h = self.page_size(layout)
        page = pygame.Surface((w, h))
        page.fill(self.cfg.background)
        ox, oy = self._origin()
        bottom = oy + self.px(layout.length)

        # a guide under every C, and one across every beat when they stay legible
        for row in range(self.roll.rows):
            if (self.roll.lowest_pitch + row) % 12 == 0:
                x = ox + self.px(row * self.roll.column_pitch)
                pygame.draw.line(page, self.cfg.guide, (x, oy), (x, bottom), 1)
        beat = layout.per_beat / self.roll.divisor
        if self.px(beat) >= 4:
            y = 0.0
            while y <= layout.length:
                py = oy + self.px(y)
                pygame.draw.line(page, self.cfg.guide, (ox, py), (ox + self.px(layout.width), py), 1)
                y += beat

        hole_w = max(1, self.px(self.roll.column_pitch * 0.6))
        for seg in layout.segments:
            is_black = (seg.pitch % 12) not in WHITE_SET
            color = self.cfg.hole_black if is_black else self.cfg.hole_white
            x = ox + self.px(seg.column) - hole_w // 2
            y = oy + self.px(seg.y_start)
            pygame.draw.rect(page, color, (x, y, hole_w, max(1, self.px(seg.length))))

        if caption:
            self._caption(page, caption)
        return page

    def _caption(self, page: pygame.Surface, text: str):
        try:
            if self.font is None:
                pygame.font.init()
                self.font = pygame.font.Font(None, max(10, self.px(HEADER_H * 0.6)))
            surf = self.font.render(text, True, self.cfg.hole_white)
            page.blit(surf, (self.px(self.cfg.margin), self.px(self.cfg.margin)))
        except pygame.error as e:
            logging.warning("caption skipped: %s", e)

    def save(self, layout: RollLayout, path: str, caption: str = "") -> tuple[int, int]:
        page = self.draw(layout, caption)
        pygame.image.save(page, path)
        logging.info("wrote %dx%d page to %s", page.get_width(), page.get_height(), path)
        return page.get_size()
