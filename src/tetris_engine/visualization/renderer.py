from __future__ import annotations

from typing import Tuple

import pygame

from tetris_engine.game import EngineSnapshot


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (64, 64, 64),
        1: (0, 255, 255),  # I
        2: (0, 0, 255),    # J
        3: (255, 200, 0),  # L
        4: (255, 255, 0),  # O
        5: (0, 255, 0),    # S
        6: (255, 0, 255),  # T
        7: (255, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


def _shade(color: Tuple[int, int, int], factor: float) -> Tuple[int, int, int]:
    return tuple(max(0, min(255, int(c * factor))) for c in color)  # type: ignore[return-value]


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: pygame.font.Font | None = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + cols * self.cell_size + self.panel_width
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def _draw_block(self, surf: pygame.Surface, x: int, y: int, v: int) -> None:
        cs = self.cell_size
        color = _color_for_value(v)
        rect = pygame.Rect(x * cs + 1, y * cs + 1, cs - 2, cs - 2)
        pygame.draw.rect(surf, color, rect)
        light = _shade(color, 1.4)
        dark = _shade(color, 0.7)
        pygame.draw.line(surf, light, rect.topleft, rect.bottomleft)
        pygame.draw.line(surf, light, rect.topleft, rect.topright)
        pygame.draw.line(surf, dark, rect.topright, rect.bottomright)
        pygame.draw.line(surf, dark, rect.bottomleft, rect.bottomright)

    def _grid_surface(self, snap: EngineSnapshot) -> pygame.Surface:
        h, w = snap.board.shape
        cs = self.cell_size
        surf = pygame.Surface((w * cs, h * cs))
        surf.fill(_color_for_value(0))
        for y in range(h + 1):
            pygame.draw.line(surf, (128, 128, 128), (0, y * cs), (w * cs, y * cs))
        for x in range(w + 1):
            pygame.draw.line(surf, (128, 128, 128), (x * cs, 0), (x * cs, h * cs))
        for y in range(h):
            for x in range(w):
                v = int(snap.board[y, x])
                if v:
                    self._draw_block(surf, x, y, v)
        if snap.piece is not None and snap.started:
            px, py = snap.position
            for x, y in snap.piece.cells_at(px, py):
                if 0 <= y < h and 0 <= x < w:
                    self._draw_block(surf, x, y, int(snap.piece.kind))
        return surf

    def _message(self, surf: pygame.Surface, text: str) -> None:
        assert self._font is not None
        label = self._font.render(text, True, (255, 255, 255))
        surf.blit(label, label.get_rect(center=(surf.get_width() // 2, surf.get_height() // 2)))

    def draw(self, screen: pygame.Surface, snap: EngineSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        grid_surf = self._grid_surface(snap)
        if snap.paused:
            veil = pygame.Surface(grid_surf.get_size(), pygame.SRCALPHA)
            veil.fill((0, 0, 0, 150))
            grid_surf.blit(veil, (0, 0))
            self._message(grid_surf, "Paused - press P")
        elif not snap.started:
            self._message(grid_surf, "Game Over" if snap.game_over else "Press Enter to start")

        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + grid_surf.get_width()
        lines = [
            f"Score: {snap.score}",
            f"Record: {snap.high_score}",
            f"Pieces: {snap.piece_count}",
            f"Delay: {snap.delay_ms} ms",
            "",
            "Left/A, Right/D: move",
            "Up/W: rotate right",
            "Down/S: rotate left",
            "Space: drop",
            "P: pause  R: restart",
        ]
        for i, text in enumerate(lines):
            label = self._font.render(text, True, (230, 230, 230))
            screen.blit(label, (panel_x, self.margin + i * 26))
        pygame.display.flip()
