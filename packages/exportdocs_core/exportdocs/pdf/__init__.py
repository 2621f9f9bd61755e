"""Drawing surfaces."""

from .surface import DrawOp, RecordingSurface, ReportLabSurface, Surface

__all__ = ["DrawOp", "RecordingSurface", "ReportLabSurface", "Surface"]
