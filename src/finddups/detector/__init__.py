"""Duplicate detection: size bucketing and content comparison."""

from .models import DuplicateGroup, FileIdentity, SizeBucket, TraversalRecord
from .pipeline import DetectionPipeline
from .resolver import DuplicateResolver
from .size_index import SizeIndex

__all__ = [
    "DetectionPipeline",
    "DuplicateGroup",
    "DuplicateResolver",
    "FileIdentity",
    "SizeBucket",
    "SizeIndex",
    "TraversalRecord",
]
