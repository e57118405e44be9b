"""Channel segmentation into static and behavioral groups."""

from decision_engine.segmentation import channel_groups

__all__ = ["channel_groups"]
