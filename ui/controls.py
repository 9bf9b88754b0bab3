"""
Controls Handler
Processes keyboard input and turns it into playback engine commands.
"""

import pygame
from config import SPEED_MULTIPLIERS, DEFAULT_SPEED_INDEX


class ControlHandler:
    """
    Handles user input and maintains control state.
    """

    def __init__(self, engine, speed_index=DEFAULT_SPEED_INDEX):
        """
        Initialize control handler.

        Args:
            engine: PlaybackEngine instance receiving commands
            speed_index: Initial index into SPEED_MULTIPLIERS
        """
        self.engine = engine
        self.speed_multipliers = SPEED_MULTIPLIERS
        self.speed_index = max(0, min(speed_index, len(self.speed_multipliers) - 1))

        # UI state
        self.show_help = False

        self.engine.set_playback_rate(self.get_playback_rate())

    @property
    def paused(self):
        return not self.engine.playing

    def toggle_playback(self):
        """Play/pause. A finished route restarts from the beginning."""
        if self.engine.state.complete:
            self.engine.reset()

        snapshot = self.engine.toggle()
        status = "PLAYING" if snapshot.playing else "PAUSED"
        print(f"Playback {status}")
        return snapshot

    def reset(self):
        """Return to the route start with telemetry cleared."""
        snapshot = self.engine.reset()
        print("Playback reset to start of route")
        return snapshot

    def speed_up(self):
        if self.speed_index < len(self.speed_multipliers) - 1:
            self.speed_index += 1
            self.engine.set_playback_rate(self.get_playback_rate())
            print(f"Playback speed: {self.get_playback_rate():.2f}x")

    def slow_down(self):
        if self.speed_index > 0:
            self.speed_index -= 1
            self.engine.set_playback_rate(self.get_playback_rate())
            print(f"Playback speed: {self.get_playback_rate():.2f}x")

    def handle_event(self, event):
        """
        Process pygame event.

        Args:
            event: Pygame event object

        Returns:
            'quit' if user wants to quit, None otherwise
        """
        if event.type == pygame.QUIT:
            return 'quit'

        if event.type == pygame.KEYDOWN:
            # ===== PLAYBACK CONTROL =====
            if event.key == pygame.K_SPACE:
                self.toggle_playback()

            elif event.key == pygame.K_r:
                self.reset()

            elif event.key == pygame.K_EQUALS or event.key == pygame.K_PLUS:
                self.speed_up()

            elif event.key == pygame.K_MINUS:
                self.slow_down()

            # ===== VIEW CONTROL =====
            elif event.key == pygame.K_h:
                self.show_help = not self.show_help

            # ===== QUIT =====
            elif event.key == pygame.K_ESCAPE:
                return 'quit'

        return None

    def get_playback_rate(self):
        """
        Get current playback rate multiplier.

        Returns:
            Route seconds replayed per wall-clock second
        """
        return self.speed_multipliers[self.speed_index]
