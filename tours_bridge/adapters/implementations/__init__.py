"""
Adapter implementations for the external tours provider.
"""

from tours_bridge.adapters.implementations.bokun import (
    ActivityNormalizer,
    BokunConnector,
)

__all__ = [
    "ActivityNormalizer",
    "BokunConnector",
]
