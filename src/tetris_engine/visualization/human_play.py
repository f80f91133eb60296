from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetris_engine.game import Action, BlockEngine, GameConfig
from tetris_engine.highscore import DEFAULT_HIGHSCORE_FILE, load_high_score, save_high_score
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_a: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_d: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_w: Action.ROTATE_CW,
    pygame.K_DOWN: Action.ROTATE_CCW,
    pygame.K_s: Action.ROTATE_CCW,
    pygame.K_SPACE: Action.HARD_DROP,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game")
    p.add_argument("--highscore-file", type=str, default=DEFAULT_HIGHSCORE_FILE)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def run(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = BlockEngine(
        GameConfig(random_seed=args.seed),
        high_score=load_high_score(args.highscore_file),
    )
    renderer = Renderer(cell_size=args.cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(engine.grid.height, engine.grid.width))
        pygame.display.set_caption("Falling Blocks")

        last_fall = pygame.time.get_ticks()

        def finish_if_over() -> None:
            if engine.game_over and engine.new_high_score:
                save_high_score(engine.high_score, args.highscore_file)
                engine.new_high_score = False

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_RETURN, pygame.K_r):
                        if engine.started:
                            engine.restart()
                        else:
                            engine.start()
                        last_fall = pygame.time.get_ticks()
                    elif event.key == pygame.K_p:
                        engine.toggle_pause()
                    elif engine.started:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            engine.apply(action)
                            finish_if_over()

            # Gravity; the delay shrinks as pieces spawn so it is re-read each frame
            now = pygame.time.get_ticks()
            if engine.started and now - last_fall >= engine.delay_ms:
                engine.tick()
                finish_if_over()
                last_fall = now

            renderer.draw(screen, engine.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
