import pygame

from vault import Session, PathFlag, RoomFlag
from viewport import Viewport

ARROW_DIRECTIONS = {
    pygame.K_UP: PathFlag.NORTH,
    pygame.K_DOWN: PathFlag.SOUTH,
    pygame.K_LEFT: PathFlag.WEST,
    pygame.K_RIGHT: PathFlag.EAST,
}


class KeyboardController:
    """Translates key presses into session commands and view changes.

    Arrows pick the entry direction, then move the player; Alt+arrow toggles the
    passage in that direction. Page Down / Page Up / End mark the current room
    (Alt: zoom out / zoom in / reset). Home shows the portal while held, F1 the help.
    """
    def __init__(self, session: Session, viewport: Viewport):
        self.session = session
        self.viewport = viewport
        self.running = True

    def handle_event(self, event) -> bool:
        """Process one pygame event.

        Returns:
            True if the overlay needs to be redrawn
        """
        if event.type == pygame.QUIT:
            self.running = False
            return False
        if event.type == pygame.KEYDOWN:
            return self.key_down(event.key, event.mod)
        if event.type == pygame.KEYUP:
            return self.key_up(event.key)
        return False

    def key_down(self, key: int, mod: int = 0) -> bool:
        alt = bool(mod & pygame.KMOD_ALT)

        if key == pygame.K_ESCAPE:
            self.running = False
            return False
        if key == pygame.K_F1:
            # Help stays up while F1 is held; key_up hides it
            if self.viewport.viewing_portal or self.viewport.show_help:
                return False
            self.viewport.toggle_help()
            return True
        if self.viewport.show_help:
            return False

        if key in ARROW_DIRECTIONS:
            return self._arrow(ARROW_DIRECTIONS[key], alt)
        if key == pygame.K_PAGEDOWN:
            return self._mark_or_zoom(RoomFlag.IMPORTANT_1, self.viewport.zoom_out, alt)
        if key == pygame.K_PAGEUP:
            return self._mark_or_zoom(RoomFlag.IMPORTANT_2, self.viewport.zoom_in, alt)
        if key == pygame.K_END:
            if self.viewport.viewing_portal or self.session.picking_direction:
                return False
            if alt:
                self.session.reset_map()
                self.viewport.reset()
                print("Map reset. Pick the direction you left the portal by.")
                return True
            return self.session.toggle_annotation(RoomFlag.AVOID)
        if key == pygame.K_HOME:
            if self.session.picking_direction or self.viewport.viewing_portal:
                return False
            self.viewport.peek_portal()
            return True
        return False

    def key_up(self, key: int) -> bool:
        if key == pygame.K_HOME and self.viewport.viewing_portal:
            self.viewport.release_portal(self.session.position)
            return True
        if key == pygame.K_F1 and self.viewport.show_help:
            self.viewport.toggle_help()
            return True
        return False

    def _arrow(self, direction: PathFlag, alt: bool) -> bool:
        if self.session.picking_direction:
            if alt:
                return False
            return self.session.initialize_map(direction)
        if self.viewport.viewing_portal:
            return False
        if alt:
            return self.session.toggle_room_link(direction)
        if not self.session.move_player(direction):
            return False
        self.viewport.follow(self.session.position)
        return True

    def _mark_or_zoom(self, kind: RoomFlag, zoom, alt: bool) -> bool:
        if self.viewport.viewing_portal:
            return False
        if alt:
            return zoom()
        return self.session.toggle_annotation(kind)
