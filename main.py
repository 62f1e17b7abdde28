"""
main.py — Entry point and game loop for Typing Taro.

Responsibilities:
    - Configure logging
    - Initialise pygame and create the window
    - Own the Viewport (window → native coordinate translation)
    - Run the main loop: handle events → update → render → flip
    - Translate mouse positions to native coordinates before passing them
      to Game
    - Clamp frame delta time so a stalled window cannot fire a burst of
      fall ticks
    - Wrap the loop in async for pygbag (WASM export)

Architecture note:
    main.py is intentionally thin. It owns the pygame lifecycle and the
    window — nothing else. All game logic lives in core/.

Usage (local):
    python main.py            # or the installed `typing-taro` script

Usage (WASM export):
    pygbag main.py

Environment:
    TYPING_TARO_CONFIG  — path of the JSON config file
    TYPING_TARO_LOG     — log level name (default INFO)
"""

import asyncio
import logging
import os

import pygame

from core.audio import Audio
from core.config import SettingsProvider
from core.game import Game
from settings import SCREEN_W, SCREEN_H, FPS, TITLE, MAX_FRAME_MS
from utils.viewport import Viewport

# Desktop window starts at native size; resizing letterboxes.
_WINDOW_W = SCREEN_W
_WINDOW_H = SCREEN_H

logger = logging.getLogger(__name__)


async def main() -> None:
    """Async main loop — compatible with both CPython and pygbag WASM."""
    logging.basicConfig(
        level=os.environ.get("TYPING_TARO_LOG", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    pygame.init()

    window = pygame.display.set_mode((_WINDOW_W, _WINDOW_H), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)
    pygame.key.start_text_input()

    game_surface = pygame.Surface((SCREEN_W, SCREEN_H))
    viewport = Viewport(_WINDOW_W, _WINDOW_H)

    clock    = pygame.time.Clock()
    provider = SettingsProvider()
    game     = Game(provider)
    game.set_audio(Audio(muted=provider.muted, volume=provider.volume))
    logger.info("[startup] config=%s", provider.path)

    running = True
    while running:
        dt = min(clock.tick(FPS), MAX_FRAME_MS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE:
                viewport.update(event.w, event.h)

            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP,
                                pygame.MOUSEMOTION):
                if viewport.in_bounds(*event.pos):
                    # pygame events are immutable, rebuild with the native pos
                    attrs = dict(event.dict, pos=viewport.to_game(*event.pos))
                    game.handle_event(pygame.event.Event(event.type, attrs))

            elif event.type in (pygame.KEYDOWN, pygame.TEXTINPUT):
                game.handle_event(event)

        mouse = pygame.mouse.get_pos()
        game.update(dt, viewport.to_game(*mouse) if viewport.in_bounds(*mouse) else None)

        game.render(game_surface)
        viewport.blit(window, game_surface)
        pygame.display.flip()

        await asyncio.sleep(0)

    game.shutdown()
    pygame.quit()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
