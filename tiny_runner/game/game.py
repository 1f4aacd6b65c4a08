# tiny_runner/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_RETURN, K_ESCAPE, K_p, K_m
from .config import WIDTH, HEIGHT, FPS, MAX_DT, BEST_FILE_DEFAULT
from .render import Renderer
from .score_store import ScoreStore
from .session import GameSession
from .sound import Blipper

logger = logging.getLogger(__name__)

JUMP_KEYS = (K_SPACE, K_RETURN)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Tiny Runner: jump over the blocks.")
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for a random layout every launch.")
    p.add_argument("--best-file", type=str, default=BEST_FILE_DEFAULT,
                   help="Where the best score is kept.")
    p.add_argument("--mute", action="store_true", help="Start muted.")
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def press(session: GameSession):
    """Jump input went down: restart when not running, otherwise jump."""
    if not session.running:
        session.start()
    else:
        session.request_jump()


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Tiny Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()

    session = GameSession(seed=args.seed, store=ScoreStore(args.best_file),
                          sound=Blipper())
    if args.mute:
        session.toggle_mute()
    renderer = Renderer(screen, session.world)
    logger.info("Best score %d loaded from %s", session.best, session.store.path)

    while True:
        # tick() runs every frame, paused or not, so resuming never replays paused time
        dt = clock.tick(FPS) / 1000.0
        if dt > MAX_DT:  # clamp stalls
            dt = MAX_DT

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in JUMP_KEYS:
                    press(session)
                if event.key == K_p:
                    session.toggle_pause()
                if event.key == K_m:
                    session.toggle_mute()
            if event.type == pygame.KEYUP and event.key in JUMP_KEYS:
                session.release_jump()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                press(session)
            if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                session.release_jump()

        if session.running and not session.paused:
            session.step(dt)

        renderer.draw(session.snapshot())
        session.decay_shake()
        session.drain_events()
        pygame.display.flip()


if __name__ == "__main__":
    run()
