import pygame
from OpenGL.GL import (
    glBegin, glEnd, glColor3f, glVertex2f, glClearColor, glClear, glDrawPixels, glWindowPos2d, glLineWidth,
    GL_QUADS, GL_LINE_LOOP, GL_LINES, GL_COLOR_BUFFER_BIT, GL_RGBA, GL_UNSIGNED_BYTE
)

from settings import OverlaySettings
from vault import Session, Room, RoomFlag, PathFlag
from vault.grid import DIRECTION_VECTORS
from viewport import Viewport

# Fractions of the room cell
ROOM_FILL = 0.8
PASSAGE_WIDTH = 0.2

# Colors (R,G,B) floats 0..1
BACKGROUND_COLOR = (0.12, 0.12, 0.14)
ROOM_COLORS = {
    "visited": (0.75, 0.72, 0.62),
    "unvisited": (0.35, 0.35, 0.38),
}
MARKER_COLORS = {
    RoomFlag.PORTAL: (0.55, 0.3, 0.85),
    RoomFlag.AVOID: (0.85, 0.2, 0.2),
    RoomFlag.IMPORTANT_1: (0.95, 0.8, 0.2),
    RoomFlag.IMPORTANT_2: (0.3, 0.8, 0.35),
}
ROUTE_COLOR = (0.95, 0.85, 0.1)
TRAIL_COLOR = (0.9, 0.25, 0.2)
PLAYER_COLOR = (0.2, 0.6, 0.95)
SCALE_ON_COLOR = (0.85, 0.85, 0.85)
SCALE_OFF_COLOR = (0.3, 0.3, 0.3)

HELP_LINES = [
    "Arrows: move (first press picks the portal exit)",
    "Alt+Arrows: open/close passage",
    "Page Down / Page Up: mark room yellow / green",
    "End: mark room to avoid",
    "Alt+Page Down / Alt+Page Up: zoom out / in",
    "Home (hold): show portal",
    "Alt+End: reset map",
    "Esc: quit",
]


def draw_rect(x: float, y: float, w: float, h: float, color):
    glColor3f(*color)
    glBegin(GL_QUADS)
    glVertex2f(x, y)
    glVertex2f(x + w, y)
    glVertex2f(x + w, y + h)
    glVertex2f(x, y + h)
    glEnd()


def draw_outline(x: float, y: float, w: float, h: float, color):
    glColor3f(*color)
    glBegin(GL_LINE_LOOP)
    glVertex2f(x, y)
    glVertex2f(x + w, y)
    glVertex2f(x + w, y + h)
    glVertex2f(x, y + h)
    glEnd()


def draw_segments(points, color, width: int = 2):
    """Draw a polyline through the given pixel points."""
    if len(points) < 2:
        return
    glColor3f(*color)
    glLineWidth(width)
    glBegin(GL_LINES)
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        glVertex2f(x1, y1)
        glVertex2f(x2, y2)
    glEnd()
    glLineWidth(1)


class Visualization:
    def __init__(self, session: Session, viewport: Viewport, settings: OverlaySettings):
        self.session = session
        self.viewport = viewport
        self.settings = settings
        self.font = pygame.font.SysFont("Arial", 16)
        self.title_font = pygame.font.SysFont("Arial", 22, bold=True)

    # --- Coordinates ---
    def cell_size(self) -> float:
        return self.settings.room_area * self.viewport.effective_scale / self.settings.max_scale

    def room_to_pixel(self, x: int, y: int):
        """Centre of a room in window pixels, following the viewport."""
        zoom = self.viewport.effective_scale / self.settings.max_scale
        vx, vy = self.viewport.position
        px = self.settings.window_width / 2 + (vx + x * self.settings.room_area) * zoom
        py = self.settings.window_height / 2 + (vy + y * self.settings.room_area) * zoom
        return px, py

    # --- Drawing ---
    def render(self):
        glClearColor(*BACKGROUND_COLOR, 1.0)
        glClear(GL_COLOR_BUFFER_BIT)

        if self.session.picking_direction:
            self.render_text_lines(["Which way did you leave the portal?", "Press an arrow key."],
                                   self.settings.window_width // 2 - 140, self.settings.window_height // 2,
                                   self.title_font)
        else:
            for room in self.session.rooms():
                self.draw_room(room)
            self.draw_trail()
            self.draw_route()
            self.draw_player()

        if self.viewport.show_scale_meter:
            self.draw_scale_meter()
        if self.viewport.show_help:
            self.render_text_lines(HELP_LINES, 20, self.settings.window_height - 40, self.font)
        else:
            self.render_text_lines(["F1: help"], 12, self.settings.window_height - 28, self.font)

    def draw_room(self, room: Room):
        size = self.cell_size()
        cx, cy = self.room_to_pixel(*room.position)
        body = size * ROOM_FILL
        color = ROOM_COLORS["visited" if room.visited else "unvisited"]
        draw_rect(cx - body / 2, cy - body / 2, body, body, color)

        # Passage stubs reaching into the gap between rooms
        stub = size * PASSAGE_WIDTH
        gap = (size - body) / 2
        for direction, (dx, dy) in DIRECTION_VECTORS.items():
            if not room.has_passage(direction):
                continue
            if dx:
                x = cx + dx * body / 2 - (gap if dx < 0 else 0)
                draw_rect(x, cy - stub / 2, gap, stub, color)
            else:
                y = cy + dy * body / 2 - (gap if dy < 0 else 0)
                draw_rect(cx - stub / 2, y, stub, gap, color)

        marker = MARKER_COLORS.get(room.flags)
        if marker:
            inner = body * 0.5
            draw_rect(cx - inner / 2, cy - inner / 2, inner, inner, marker)
        if room.paths == PathFlag.NONE:
            draw_outline(cx - body / 2, cy - body / 2, body, body, TRAIL_COLOR)

    def draw_route(self):
        points = [self.room_to_pixel(x, y) for x, y in self.session.route_positions()]
        draw_segments(points, ROUTE_COLOR, width=3)

    def draw_trail(self):
        """Short breadcrumb: one stroke from each remembered room toward where it was entered from."""
        size = self.cell_size()
        glColor3f(*TRAIL_COLOR)
        glLineWidth(2)
        glBegin(GL_LINES)
        for entry in self.session.history:
            cx, cy = self.room_to_pixel(*entry.position)
            dx, dy = DIRECTION_VECTORS[entry.arrived_from]
            glVertex2f(cx, cy)
            glVertex2f(cx + dx * size * 0.7, cy + dy * size * 0.7)
        glEnd()
        glLineWidth(1)

    def draw_player(self):
        size = self.cell_size() * 0.3
        cx, cy = self.room_to_pixel(*self.session.position)
        draw_rect(cx - size / 2, cy - size / 2, size, size, PLAYER_COLOR)
        draw_outline(cx - size / 2, cy - size / 2, size, size, (0.0, 0.0, 0.0))

    def draw_scale_meter(self):
        x = self.settings.window_width - 16
        y = self.settings.window_height - 10
        for level in range(self.settings.min_scale, self.settings.max_scale + 1):
            color = SCALE_ON_COLOR if level <= self.viewport.scale else SCALE_OFF_COLOR
            y -= 6
            draw_rect(x, y, 8, 4, color)

    def render_text_lines(self, lines, x: int, y: int, font):
        """Blit text at window position (x, y) measured from the bottom-left, first line on top."""
        line_gap = 4
        for i, line in enumerate(lines):
            text_surface = font.render(line, True, (235, 235, 235), (30, 30, 34))
            text_data = pygame.image.tobytes(text_surface, "RGBA", True)
            glWindowPos2d(x, y - i * (font.get_height() + line_gap))
            glDrawPixels(text_surface.get_width(), text_surface.get_height(), GL_RGBA, GL_UNSIGNED_BYTE, text_data)
