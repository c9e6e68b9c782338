"""Settings that control how a markdown view lays out and styles its blocks."""

from dataclasses import asdict, dataclass, field, fields
import json
from typing import Any, Dict, Tuple


DEFAULT_HEADING_SCALES = (1.7, 1.5, 1.25, 1.1, 1.0, 0.9)


@dataclass
class MarkdownViewSettings:
    """
    Layout and style settings for a markdown view.
    """
    depth_indent: int = 16  # Left inset per level of list nesting, in pixels
    marker_spacing: int = 4  # Gap between a list marker and its content
    block_spacing: int = 16  # Vertical gap between blocks
    code_max_height: int = 250
    code_style: str = "monokai"  # Pygments style name
    code_tab_width: int = 4
    code_line_numbers: bool = True
    heading_scales: Tuple[float, ...] = field(default=DEFAULT_HEADING_SCALES)
    bullet: str = "•"

    def __post_init__(self) -> None:
        for name in ("depth_indent", "marker_spacing", "block_spacing", "code_max_height", "code_tab_width"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

        if not isinstance(self.code_style, str):
            raise ValueError(f"code_style must be a string, got {self.code_style!r}")

        if not isinstance(self.code_line_numbers, bool):
            raise ValueError(f"code_line_numbers must be a boolean, got {self.code_line_numbers!r}")

        if isinstance(self.heading_scales, str):
            raise ValueError(f"heading_scales must be a list of numbers, got {self.heading_scales!r}")

        try:
            self.heading_scales = tuple(float(scale) for scale in self.heading_scales)

        except (TypeError, ValueError) as e:
            raise ValueError(f"heading_scales must be a list of numbers, got {self.heading_scales!r}") from e

        if len(self.heading_scales) != 6:
            raise ValueError(f"heading_scales must have 6 entries, got {len(self.heading_scales)}")

        if not isinstance(self.bullet, str) or not self.bullet:
            raise ValueError(f"bullet must be a non-empty string, got {self.bullet!r}")

    def heading_scale(self, level: int) -> float:
        """Get the font scale for a heading level (1-6)."""
        return self.heading_scales[max(1, min(6, level)) - 1]

    @classmethod
    def create_default(cls) -> "MarkdownViewSettings":
        """Create a settings object with default values."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarkdownViewSettings":
        """
        Create settings from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If a value is invalid
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(cls, path: str) -> "MarkdownViewSettings":
        """
        Load settings from a JSON file.

        Args:
            path: Path to the settings file

        Returns:
            MarkdownViewSettings object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            ValueError: If a setting has an invalid value
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("settings file must contain a JSON object")

        return cls.from_dict(data)

    def save(self, path: str) -> None:
        """
        Save settings to a JSON file.

        Args:
            path: Path where to save the settings
        """
        data = asdict(self)
        data["heading_scales"] = list(self.heading_scales)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=4)
