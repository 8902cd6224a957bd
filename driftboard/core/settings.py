"""
Driftboard Composition Settings

Tunable constants for interaction, animation, layout and export.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Tuple
import math

from .errors import SettingsError


@dataclass
class CompositionSettings:
    """
    Settings for a composition session.

    Attributes:
        click_tolerance: Grab tolerance around item edges in screen pixels
        snap_increment_deg: Rotation snap step applied on placement (degrees)
        settle_duration: Length of the landing pulse in ticks
        settle_amplitude: Peak extra scale of the landing pulse
        drag_blend: Fraction of the remaining distance to the pointer covered per tick
        min_scale, max_scale: Clamp range for an item's scale factor
        scale_up_step, scale_down_step: Multipliers for the +/- keys
        wheel_rotation_factor: Radians of rotation per wheel delta unit
        initial_population: Transient items spawned on start/refresh/clear
        min_population: Transient items maintained every tick
        artboard_width: Preferred artboard width in pixels
        header_height: Height of the header strip in pixels
        artboard_margin: Gap between header and artboard in pixels
        tick_interval_ms: Scheduler interval between ticks
        hires_width, hires_height: High-resolution export size in pixels
        hires_dpi: DPI stored in the high-resolution PNG
        export_dir: Directory receiving exported files ("" = current directory)
    """
    click_tolerance: float = 5.0
    snap_increment_deg: float = 15.0
    settle_duration: int = 45
    settle_amplitude: float = 0.05
    drag_blend: float = 0.4
    min_scale: float = 0.1
    max_scale: float = 6.0
    scale_up_step: float = 1.08
    scale_down_step: float = 0.92
    wheel_rotation_factor: float = 0.002
    initial_population: int = 30
    min_population: int = 20
    artboard_width: float = 500.0
    header_height: float = 80.0
    artboard_margin: float = 20.0
    tick_interval_ms: int = 16
    hires_width: int = 5906
    hires_height: int = 8350
    hires_dpi: int = 300
    export_dir: str = ""

    @property
    def snap_increment(self) -> float:
        """Snap step in radians."""
        return math.radians(self.snap_increment_deg)

    def clamp_scale(self, scale: float) -> float:
        return max(self.min_scale, min(self.max_scale, scale))

    def validate(self) -> Tuple[bool, str]:
        """
        Validate settings.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.click_tolerance < 0:
            return False, "Click tolerance cannot be negative"
        if self.snap_increment_deg < 0 or self.snap_increment_deg > 360:
            return False, "Snap increment must be between 0 and 360 degrees"
        if self.settle_duration <= 0:
            return False, "Settle duration must be positive"
        if not 0 < self.drag_blend <= 1:
            return False, "Drag blend must be in (0, 1]"
        if self.min_scale <= 0 or self.max_scale < self.min_scale:
            return False, "Scale limits must satisfy 0 < min_scale <= max_scale"
        if self.scale_up_step <= 1 or not 0 < self.scale_down_step < 1:
            return False, "Scale steps must grow above 1 and shrink below 1"
        if self.min_population < 0 or self.initial_population < self.min_population:
            return False, "Initial population must be at least the minimum population"
        if self.artboard_width <= 0 or self.header_height < 0 or self.artboard_margin < 0:
            return False, "Artboard dimensions must be positive"
        if self.tick_interval_ms <= 0:
            return False, "Tick interval must be positive"
        if self.hires_width <= 0 or self.hires_height <= 0 or self.hires_dpi <= 0:
            return False, "High-resolution export size must be positive"
        return True, ""

    def ensure_valid(self) -> 'CompositionSettings':
        """Raise SettingsError if the settings are invalid."""
        is_valid, error = self.validate()
        if not is_valid:
            raise SettingsError(error)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompositionSettings':
        """
        Build settings from a (possibly partial) dictionary.

        Unknown keys are ignored and values are coerced to the field's
        default type, so strings read back from QSettings are accepted.
        """
        settings = cls()
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            default = getattr(settings, f.name)
            try:
                setattr(settings, f.name, type(default)(data[f.name]))
            except (TypeError, ValueError) as e:
                raise SettingsError(f"Invalid value for {f.name}: {data[f.name]!r}") from e
        return settings.ensure_valid()
