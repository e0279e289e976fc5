"""Surface state driven by streamed operations."""

from .processor import SurfaceProcessor

__all__ = ["SurfaceProcessor"]
