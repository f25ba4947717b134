"""Inverse transforms for the supported cipher families."""

from cryptsearch.services.transforms.base import Key, Transform
from cryptsearch.services.transforms.grouping import modulo_groups
from cryptsearch.services.transforms.registry import TransformRegistry
from cryptsearch.services.transforms.polyalphabetic import BeaufortTransform, VigenereTransform
from cryptsearch.services.transforms.transposition import ColumnarTransform, PeriodicTransform

__all__ = [
    "Key",
    "Transform",
    "TransformRegistry",
    "modulo_groups",
    "ColumnarTransform",
    "PeriodicTransform",
    "VigenereTransform",
    "BeaufortTransform",
]
