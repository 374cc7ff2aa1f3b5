"""
Bokun adapter package: transport and normalization for the activities API.
"""

from tours_bridge.adapters.implementations.bokun.connector import BokunConnector
from tours_bridge.adapters.implementations.bokun.normalizer import (
    ActivityNormalizer,
    normalize_activity,
)


__all__ = [
    "BokunConnector",
    "ActivityNormalizer",
    "normalize_activity",
]
