"""
Route Replay - Main Entry Point
Loads a recorded route and drives the playback engine from a frame clock.

Usage:
    python main.py                                   # Default route, pygame window
    python main.py --route https://example.com/route.json
    python main.py --route my-route.json --headless --rate 5
"""

import argparse
import sys
import time

import pygame

# Import configuration
from config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
    HEADLESS_FPS,
    HEADLESS_REPORT_INTERVAL,
    ROUTE_PATH,
    SPEED_MULTIPLIERS,
    DEFAULT_SPEED_INDEX,
    SHOW_FPS,
    COLOR_BLACK,
    COLOR_WHITE,
)

# Import core components
from core.engine import PlaybackEngine

# Import data providers
from data.route_source import load_route

# Import UI components
from ui.controls import ControlHandler
from ui.instruments import InstrumentPanel, ControlsHelpOverlay, telemetry_line


def parse_args(argv=None):
    """Parse command line options."""
    ap = argparse.ArgumentParser(description='Replay a recorded vehicle route with live telemetry')
    ap.add_argument('--route', default=ROUTE_PATH, help='Route JSON file path or http(s) URL')
    ap.add_argument('--rate', type=float, default=SPEED_MULTIPLIERS[DEFAULT_SPEED_INDEX],
                    help='Playback rate (route seconds per wall-clock second)')
    ap.add_argument('--fps', type=float, default=None, help='Frame ticks per second')
    ap.add_argument('--headless', action='store_true', help='Run without a window, printing telemetry')
    return ap.parse_args(argv)


def closest_speed_index(rate):
    """Index of the SPEED_MULTIPLIERS entry nearest to rate."""
    return min(range(len(SPEED_MULTIPLIERS)), key=lambda i: abs(SPEED_MULTIPLIERS[i] - rate))


def run_headless(engine, fps=HEADLESS_FPS, report_interval=HEADLESS_REPORT_INTERVAL,
                 now=time.monotonic, sleep=time.sleep):
    """
    Tick the engine at a fixed rate until the route completes.

    Args:
        engine: PlaybackEngine with a route loaded
        fps: Ticks per second
        report_interval: Seconds between printed telemetry lines
        now: Wall-clock source (monotonic seconds)
        sleep: Sleep function

    Returns:
        Final Snapshot
    """
    dt = 1.0 / fps if fps > 0 else 1.0 / HEADLESS_FPS

    snapshot = engine.play()
    if not snapshot.playing:
        print(telemetry_line(snapshot))
        return snapshot

    last_report = None
    while snapshot.playing:
        tick_time = now()
        snapshot = engine.tick(tick_time)

        if last_report is None or tick_time - last_report >= report_interval:
            print(telemetry_line(snapshot))
            last_report = tick_time

        if snapshot.playing:
            sleep(dt)

    print(telemetry_line(snapshot))
    return snapshot


def run_window(engine, fps=FPS):
    """Pygame window driver: frame clock, input handling and instrument rendering."""
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption("Vehicle Route Replay")
    clock = pygame.time.Clock()

    instruments = InstrumentPanel(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT)
    controls = ControlHandler(engine, closest_speed_index(engine.state.playback_rate))
    help_overlay = ControlsHelpOverlay()
    fps_font = pygame.font.SysFont('monospace', 14)
    waypoint_count = len(engine.state.route)

    print("\n" + "=" * 60)
    print("Replay ready! PAUSED - Press SPACE to start.")
    print("Press H for help, ESC to quit.")
    print("=" * 60 + "\n")

    running = True
    while running:
        clock.tick(fps)

        # ===== EVENT HANDLING =====
        for event in pygame.event.get():
            # Check for button clicks first (instrument panel takes priority)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if instruments.handle_button_click(event.pos, controls):
                    continue

            if controls.handle_event(event) == 'quit':
                running = False

        instruments.update_button_hover(pygame.mouse.get_pos())

        # ===== PLAYBACK UPDATE =====
        snapshot = engine.tick(time.monotonic())

        # ===== RENDERING =====
        screen.fill(COLOR_BLACK)
        instruments.render(screen, snapshot, waypoint_count)

        if controls.show_help:
            help_overlay.render(screen)

        if SHOW_FPS:
            fps_text = fps_font.render(f"FPS: {int(clock.get_fps())}", True, COLOR_WHITE)
            screen.blit(fps_text, (10, SCREEN_HEIGHT - 24))

        pygame.display.flip()

    pygame.quit()


def main(argv=None):
    """Route replay entry point."""
    args = parse_args(argv)

    print("=" * 60)
    print("Vehicle Route Replay")
    print("=" * 60)

    print(f"Loading route from {args.route}...")
    route = load_route(args.route)

    engine = PlaybackEngine(route, playback_rate=args.rate)

    if args.headless:
        run_headless(engine, fps=args.fps or HEADLESS_FPS)
    else:
        run_window(engine, fps=args.fps or FPS)

    print("Replay closed")


def run(argv=None):
    """Console entry point: main() with clean exits on Ctrl-C and fatal errors."""
    try:
        main(argv)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)


if __name__ == '__main__':
    run()
