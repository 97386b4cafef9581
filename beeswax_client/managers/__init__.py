"""Beeswax client managers.

Managers bind the client's request, pagination and upload operations to a
single Beeswax entity.
"""

from .entities import PAGE_SIZE, BeeswaxEntityManager
from .segment_uploads import SegmentUploadManager

__all__ = [
    "PAGE_SIZE",
    "BeeswaxEntityManager",
    "SegmentUploadManager",
]
