"""
Instrument Panel
Displays replay telemetry (position, timestamp, elapsed time, distance, speed)
and the play/pause and reset buttons.
"""

import math
import pygame
from config import (
    COLOR_PANEL_BG,
    COLOR_BORDER,
    COLOR_TEXT,
    COLOR_LABEL,
    COLOR_GREEN,
    COLOR_RED,
    COLOR_WHITE,
    COLOR_VEHICLE,
    FONT_TITLE_SIZE,
    FONT_LABEL_SIZE,
    FONT_VALUE_SIZE,
    FONT_SMALL_SIZE,
    FONT_FAMILY,
    INSTRUMENT_PANEL_PADDING,
    INSTRUMENT_LINE_SPACING,
    INSTRUMENT_SECTION_SPACING,
    INSTRUMENT_VALUE_INDENT,
    BUTTON_WIDTH,
    BUTTON_HEIGHT,
)
from core.geo import ms_to_kmh


# ==================== Display Formatting ====================

def format_coordinates(position):
    """Format (lat, lng) to six decimals, '--' when there is no position."""
    if position is None:
        return "--"
    return f"{position[0]:.6f}, {position[1]:.6f}"


def format_timestamp(timestamp):
    """Show an ISO-8601 timestamp as 'YYYY-MM-DD HH:MM:SS' (UTC designator dropped)."""
    if not timestamp:
        return "--"
    text = timestamp.replace('T', ' ').replace('Z', '')
    if text.endswith('+00:00'):
        text = text[:-6]
    return text


def format_elapsed(seconds):
    """Whole elapsed seconds."""
    return f"{math.floor(seconds)} sec"


def format_distance(meters):
    return f"{meters:.2f} m"


def format_speed(ms):
    return f"{ms:.1f} m/s ({ms_to_kmh(ms):.1f} km/h)"


def telemetry_line(snapshot):
    """
    Single-line telemetry summary (used by the headless driver).

    Args:
        snapshot: Snapshot from the playback engine

    Returns:
        Formatted string
    """
    return (f"[{format_elapsed(snapshot.elapsed_time_seconds):>8}] "
            f"pos {format_coordinates(snapshot.current_position)} | "
            f"{format_timestamp(snapshot.current_waypoint_timestamp)} | "
            f"dist {format_distance(snapshot.distance_travelled_meters)} | "
            f"replay speed {format_speed(snapshot.speed_meters_per_second)}")


class Button:
    """
    Clickable button for instrument panel.
    """
    def __init__(self, x, y, width, height, text, color=None):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.color = color or COLOR_LABEL
        self.hovered = False
        self.font = pygame.font.SysFont(FONT_FAMILY, 11, bold=True)

    def draw(self, surface):
        # Background color - brighter if hovered
        bg_color = (60, 60, 60) if self.hovered else (40, 40, 40)
        pygame.draw.rect(surface, bg_color, self.rect)
        pygame.draw.rect(surface, self.color, self.rect, 2)

        text_surface = self.font.render(self.text, True, COLOR_WHITE)
        text_rect = text_surface.get_rect(center=self.rect.center)
        surface.blit(text_surface, text_rect)

    def check_hover(self, mouse_pos):
        self.hovered = self.rect.collidepoint(mouse_pos)
        return self.hovered

    def check_click(self, mouse_pos):
        return self.rect.collidepoint(mouse_pos)


class InstrumentPanel:
    """
    Renders the telemetry dashboard for the current snapshot.
    """

    def __init__(self, x, y, width, height):
        """
        Initialize instrument panel.

        Args:
            x, y: Top-left position in pixels
            width, height: Panel dimensions in pixels
        """
        self.x = x
        self.y = y
        self.width = width
        self.height = height

        # Load fonts
        self.font_title = pygame.font.SysFont(FONT_FAMILY, FONT_TITLE_SIZE, bold=True)
        self.font_label = pygame.font.SysFont(FONT_FAMILY, FONT_LABEL_SIZE)
        self.font_value = pygame.font.SysFont(FONT_FAMILY, FONT_VALUE_SIZE, bold=True)
        self.font_small = pygame.font.SysFont(FONT_FAMILY, FONT_SMALL_SIZE)

        # Buttons (positioned during render)
        self.buttons = {}

    def render(self, surface, snapshot, waypoint_count=0):
        """
        Render all instrument panels.

        Args:
            surface: Pygame surface
            snapshot: Snapshot from the playback engine
            waypoint_count: Number of waypoints in the loaded route
        """
        bg_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(surface, COLOR_PANEL_BG, bg_rect)
        pygame.draw.rect(surface, COLOR_BORDER, bg_rect, 2)

        y_pos = self.y + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("> Vehicle Route Replay", True, COLOR_VEHICLE)
        surface.blit(title, (self.x + INSTRUMENT_PANEL_PADDING, y_pos))

        # Playback status indicator
        if snapshot.playing:
            status = self.font_title.render("> PLAYING", True, COLOR_GREEN)
        elif snapshot.complete:
            status = self.font_title.render("COMPLETE", True, COLOR_LABEL)
        else:
            status = self.font_title.render("|| PAUSED", True, COLOR_RED)
        surface.blit(status, (self.x + self.width - status.get_width() - 10, y_pos))

        y_pos += INSTRUMENT_SECTION_SPACING
        y_pos = self._render_position_panel(surface, y_pos, snapshot, waypoint_count)
        y_pos = self._render_telemetry_panel(surface, y_pos, snapshot)
        self._render_buttons(surface, y_pos, snapshot)

    def _render_row(self, surface, y_pos, label, value):
        x = self.x + INSTRUMENT_PANEL_PADDING
        label_surface = self.font_label.render(label, True, COLOR_LABEL)
        surface.blit(label_surface, (x, y_pos))
        y_pos += INSTRUMENT_LINE_SPACING

        value_surface = self.font_value.render(value, True, COLOR_TEXT)
        surface.blit(value_surface, (x + INSTRUMENT_VALUE_INDENT, y_pos))
        return y_pos + INSTRUMENT_LINE_SPACING + 4

    def _render_position_panel(self, surface, y_pos, snapshot, waypoint_count):
        """Render coordinates, waypoint timestamp and segment progress."""
        y_pos = self._render_row(surface, y_pos, "Coordinates:",
                                 format_coordinates(snapshot.current_position))
        y_pos = self._render_row(surface, y_pos, "Timestamp:",
                                 format_timestamp(snapshot.current_waypoint_timestamp))

        if waypoint_count:
            progress_str = (f"Waypoint {snapshot.segment_index + 1}/{waypoint_count}  "
                            f"({snapshot.segment_progress * 100:.0f}%)  "
                            f"Rate: {snapshot.playback_rate:.2f}x")
            label = self.font_small.render(progress_str, True, COLOR_LABEL)
            surface.blit(label, (self.x + INSTRUMENT_PANEL_PADDING, y_pos))
            y_pos += INSTRUMENT_LINE_SPACING

        return y_pos + 6

    def _render_telemetry_panel(self, surface, y_pos, snapshot):
        """Render elapsed time, distance and speed."""
        y_pos = self._render_row(surface, y_pos, "Elapsed Time:",
                                 format_elapsed(snapshot.elapsed_time_seconds))
        y_pos = self._render_row(surface, y_pos, "Distance:",
                                 format_distance(snapshot.distance_travelled_meters))
        y_pos = self._render_row(surface, y_pos, "Replay Speed:",
                                 format_speed(snapshot.speed_meters_per_second))
        return y_pos

    def _render_buttons(self, surface, y_pos, snapshot):
        """Render clickable control buttons."""
        x = self.x + INSTRUMENT_PANEL_PADDING
        button_spacing = 5

        self.buttons = {}
        self.buttons['play'] = Button(x, y_pos, BUTTON_WIDTH, BUTTON_HEIGHT,
                                      "PAUSE" if snapshot.playing else "PLAY",
                                      COLOR_RED if snapshot.playing else COLOR_GREEN)
        self.buttons['reset'] = Button(x + BUTTON_WIDTH + button_spacing, y_pos,
                                       BUTTON_WIDTH, BUTTON_HEIGHT, "RESET", COLOR_LABEL)

        for button in self.buttons.values():
            button.draw(surface)

    def handle_button_click(self, mouse_pos, controls):
        """
        Handle button clicks.

        Args:
            mouse_pos: (x, y) mouse position
            controls: ControlHandler instance

        Returns:
            True if a button was clicked, False otherwise
        """
        if 'play' in self.buttons and self.buttons['play'].check_click(mouse_pos):
            controls.toggle_playback()
            return True

        if 'reset' in self.buttons and self.buttons['reset'].check_click(mouse_pos):
            controls.reset()
            return True

        return False

    def update_button_hover(self, mouse_pos):
        """Update hover state for all buttons."""
        for button in self.buttons.values():
            button.check_hover(mouse_pos)


class ControlsHelpOverlay:
    """
    Displays keyboard controls help overlay.
    """

    def __init__(self):
        self.font_title = pygame.font.SysFont(FONT_FAMILY, 20, bold=True)
        self.font_text = pygame.font.SysFont(FONT_FAMILY, 14)

    def render(self, surface):
        """
        Render help overlay (semi-transparent).

        Args:
            surface: Pygame surface
        """
        width = surface.get_width() - 40
        height = 220

        overlay = pygame.Surface((width, height))
        overlay.set_alpha(230)
        overlay.fill((40, 40, 40))
        pygame.draw.rect(overlay, COLOR_WHITE, overlay.get_rect(), 3)

        title = self.font_title.render("KEYBOARD CONTROLS", True, COLOR_WHITE)
        overlay.blit(title, (20, 15))

        y = 50
        controls = [
            ("SPACE", "Play/Pause"),
            ("R key", "Reset to start"),
            ("+ / - keys", "Playback speed up/down"),
            ("H key", "Toggle this help"),
            ("ESC", "Quit"),
        ]

        for key_text, description in controls:
            key = self.font_text.render(key_text, True, COLOR_TEXT)
            overlay.blit(key, (20, y))
            desc = self.font_text.render(description, True, COLOR_LABEL)
            overlay.blit(desc, (180, y))
            y += 30

        surface.blit(overlay, (20, (surface.get_height() - height) // 2))
