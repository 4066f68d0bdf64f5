"""
Tests for the overlay layer around the vault model.

This test suite covers:
- Viewport scrolling, zoom limits and portal peek
- Keyboard controller dispatch for both map phases
- Settings loading and fallback
"""

import json
import pygame
import pytest

from controls import KeyboardController
from settings import OverlaySettings, load_settings
from vault import Session, PathFlag, RoomFlag, ORIGIN
from viewport import Viewport


# ==================== FIXTURES ====================

@pytest.fixture
def viewport():
    return Viewport(room_area=40, scale=6, min_scale=1, max_scale=8, easing=0.1)


@pytest.fixture
def controller(viewport):
    return KeyboardController(Session(), viewport)


@pytest.fixture
def started(controller):
    """Controller whose map was started by leaving the portal southwards."""
    controller.key_down(pygame.K_DOWN)
    return controller


# ==================== VIEWPORT TESTS ====================

class TestViewport:
    """Test camera movement and zoom."""

    def test_follow_sets_target(self, viewport):
        viewport.follow((2, -1))
        assert viewport.target == (-80, 40)

    def test_update_converges(self, viewport):
        viewport.follow((3, -2))
        frames = 0
        while viewport.update():
            frames += 1
            assert frames < 500
        assert viewport.position == viewport.target == (-120, 80)
        assert viewport.update() is False

    def test_update_is_idle_on_target(self, viewport):
        assert viewport.update() is False
        assert viewport.position == (0, 0)

    def test_zoom_limits(self, viewport):
        assert viewport.zoom_in() is True
        assert viewport.zoom_in() is True
        assert viewport.scale == 8
        assert viewport.zoom_in() is False

        for _ in range(7):
            assert viewport.zoom_out() is True
        assert viewport.scale == 1
        assert viewport.zoom_out() is False

    def test_scale_meter_shown_after_zoom(self, viewport):
        assert viewport.show_scale_meter is False
        viewport.zoom_out()
        assert viewport.show_scale_meter is True

    def test_scale_meter_hidden_when_zoom_refused(self):
        viewport = Viewport(scale=8, max_scale=8)
        assert viewport.zoom_in() is False
        assert viewport.show_scale_meter is False

    def test_portal_peek(self, viewport):
        viewport.follow((0, 4))
        viewport.peek_portal()
        assert viewport.viewing_portal is True
        assert viewport.target == (0, 0)
        assert viewport.effective_scale == 1

        viewport.release_portal((0, 4))
        assert viewport.viewing_portal is False
        assert viewport.target == (0, -160)
        assert viewport.effective_scale == 6


# ==================== CONTROLLER TESTS ====================

class TestKeyboardController:
    """Test key dispatch into session and viewport."""

    def test_arrow_picks_direction(self, controller):
        assert controller.key_down(pygame.K_UP) is True
        portal = controller.session.vault_map.get_room(ORIGIN)
        assert portal.paths == PathFlag.NORTH
        assert controller.session.picking_direction is False

    def test_alt_arrow_ignored_while_picking(self, controller):
        assert controller.key_down(pygame.K_UP, pygame.KMOD_LALT) is False
        assert controller.session.picking_direction is True

    def test_marks_ignored_while_picking(self, controller):
        assert controller.key_down(pygame.K_END) is False
        assert controller.key_down(pygame.K_PAGEDOWN) is False
        assert controller.key_down(pygame.K_HOME) is False

    def test_move_follows_player(self, started):
        assert started.key_down(pygame.K_DOWN) is True
        assert started.session.position == (0, 1)
        assert started.viewport.target == (0, -40)

    def test_blocked_move_needs_no_redraw(self, started):
        assert started.key_down(pygame.K_UP) is False
        assert started.session.position == ORIGIN

    def test_alt_arrow_toggles_link(self, started):
        started.key_down(pygame.K_DOWN)
        assert started.key_down(pygame.K_UP, pygame.KMOD_ALT) is False  # portal side
        assert started.key_down(pygame.K_RIGHT, pygame.KMOD_ALT) is True
        assert not started.session.current_room.has_passage(PathFlag.EAST)

    def test_annotation_keys(self, started):
        started.key_down(pygame.K_DOWN)
        room = started.session.current_room
        assert started.key_down(pygame.K_PAGEDOWN) is True
        assert room.flags == RoomFlag.IMPORTANT_1
        assert started.key_down(pygame.K_PAGEUP) is True
        assert room.flags == RoomFlag.IMPORTANT_2
        assert started.key_down(pygame.K_END) is True
        assert room.flags == RoomFlag.AVOID
        assert started.key_down(pygame.K_END) is True
        assert room.flags == RoomFlag.NONE

    def test_alt_page_keys_zoom(self, started):
        assert started.key_down(pygame.K_PAGEUP, pygame.KMOD_ALT) is True
        assert started.viewport.scale == 7
        assert started.key_down(pygame.K_PAGEDOWN, pygame.KMOD_ALT) is True
        assert started.viewport.scale == 6

    def test_home_peeks_portal_while_held(self, started):
        started.key_down(pygame.K_DOWN)
        assert started.key_down(pygame.K_HOME) is True
        assert started.viewport.viewing_portal is True
        # Map keys are locked during the peek
        assert started.key_down(pygame.K_DOWN) is False
        assert started.key_down(pygame.K_END) is False
        assert started.session.position == (0, 1)

        assert started.key_up(pygame.K_HOME) is True
        assert started.viewport.viewing_portal is False
        assert started.viewport.target == (0, -40)

    def test_alt_end_resets(self, started):
        started.key_down(pygame.K_DOWN)
        started.viewport.update()
        assert started.key_down(pygame.K_END, pygame.KMOD_ALT) is True
        assert started.session.picking_direction is True
        assert started.session.rooms() == []
        assert started.viewport.position == (0, 0)
        assert started.viewport.target == (0, 0)

    def test_help_blocks_map_keys(self, started):
        assert started.key_down(pygame.K_F1) is True
        assert started.viewport.show_help is True
        assert started.key_down(pygame.K_DOWN) is False
        assert started.session.position == ORIGIN
        assert started.key_up(pygame.K_F1) is True
        assert started.viewport.show_help is False

    def test_help_survives_key_repeat(self, started):
        """Holding F1 sends repeated presses; help stays up until the key is released."""
        assert started.key_down(pygame.K_F1) is True
        assert started.key_down(pygame.K_F1) is False
        assert started.viewport.show_help is True
        assert started.key_up(pygame.K_F1) is True
        assert started.viewport.show_help is False

    def test_escape_stops(self, controller):
        controller.key_down(pygame.K_ESCAPE)
        assert controller.running is False

    def test_handle_event(self, controller):
        event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT, mod=0)
        assert controller.handle_event(event) is True
        assert controller.session.vault_map.get_room(ORIGIN).paths == PathFlag.WEST

        assert controller.handle_event(pygame.event.Event(pygame.QUIT)) is False
        assert controller.running is False


# ==================== SETTINGS TESTS ====================

class TestSettings:
    """Test settings file loading."""

    def test_bundled_settings(self):
        settings = load_settings()
        assert settings.room_area == 40
        assert settings.history_capacity == 10
        assert settings.max_route_length == 64

    def test_missing_file_uses_defaults(self, tmp_path, capsys):
        settings = load_settings(str(tmp_path / "missing.json"))
        assert settings == OverlaySettings()
        assert "[Warning]" in capsys.readouterr().out

    def test_invalid_values_use_defaults(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"window_width": -5}))
        settings = load_settings(str(path))
        assert settings.window_width == 600
        assert "[Warning]" in capsys.readouterr().out

    def test_scale_is_clamped(self, tmp_path):
        path = tmp_path / "scale.json"
        path.write_text(json.dumps({"scale": 20, "max_scale": 8}))
        settings = load_settings(str(path))
        assert settings.scale == 8

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"caption": "Vault"}))
        settings = load_settings(str(path))
        assert settings.caption == "Vault"
        assert settings.fps == 60
