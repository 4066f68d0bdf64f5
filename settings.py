import json
import os
from pydantic import BaseModel, Field

SETTINGS_FILE = "overlay_settings.json"


class OverlaySettings(BaseModel):
    """Window and map display options for the overlay."""
    caption: str = "Vault Mapper"
    window_width: int = Field(600, gt=0)
    window_height: int = Field(600, gt=0)
    fps: int = Field(60, gt=0)

    room_area: int = Field(40, gt=0)  # pixels per room at scale 1
    scale: int = 6
    min_scale: int = Field(1, ge=1)
    max_scale: int = 8
    view_easing: float = Field(0.1, gt=0.0, le=1.0)

    history_capacity: int = Field(10, gt=0)
    max_route_length: int = Field(64, gt=0)


def load_settings(path: str = None) -> OverlaySettings:
    """Load overlay settings from JSON, falling back to defaults.

    Args:
        path: Settings file; defaults to overlay_settings.json next to this module

    Returns:
        Validated OverlaySettings
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), SETTINGS_FILE)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        settings = OverlaySettings.model_validate(data)
    except Exception as e:
        print(f"[Warning] Could not load overlay settings: {e}")
        return OverlaySettings()
    if not settings.min_scale <= settings.scale <= settings.max_scale:
        print(f"[Warning] Scale {settings.scale} outside {settings.min_scale}..{settings.max_scale}, clamping")
        settings.scale = max(settings.min_scale, min(settings.max_scale, settings.scale))
    return settings
