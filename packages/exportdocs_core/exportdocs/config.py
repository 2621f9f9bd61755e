"""Render configuration shared by every document assembler."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .engine.geometry import A4_HEIGHT, A4_WIDTH, Margins, Size, mm_to_points


@dataclass(slots=True)
class RenderConfig:
    """Configuration for a single render call.

    Instances are plain values: an assembler copies what it needs and never
    writes back, so one config may be shared by concurrent renders.
    """

    page_size: Size = field(default_factory=lambda: Size(A4_WIDTH, A4_HEIGHT))
    margins: Margins = field(default_factory=lambda: Margins.symmetric(20.0, mm_to_points(10)))
    font_family: str = "Helvetica"
    line_spacing: float = 1.2
    # Turns logged recoveries (malformed dates, numbers) into errors.
    strict: bool = False
    generous_padding: float = 5.0
    compact_padding: float = 2.0
    letterhead_header_height: float = 70.0
    letterhead_footer_height: float = 80.0
    producer: str = "exportdocs"

    @property
    def content_width(self) -> float:
        return self.page_size.width - self.margins.left - self.margins.right

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]] = None) -> "RenderConfig":
        """Build a config from a dict of options, ignoring unknown keys.

        ``page_size`` may be given as a ``(width, height)`` pair and
        ``margins`` as a dict of sides or a single number.
        """
        options = dict(options or {})
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            if key not in known:
                continue
            if key == "page_size" and not isinstance(value, Size):
                value = Size.from_tuple(value)
            elif key == "margins" and not isinstance(value, Margins):
                if isinstance(value, (int, float)):
                    value = Margins.uniform(float(value))
                else:
                    value = Margins(**{k: float(v) for k, v in dict(value).items()})
            kwargs[key] = value
        return cls(**kwargs)
