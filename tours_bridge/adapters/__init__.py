"""
Adapters package for the Tours Bridge service.

This package contains components for integrating with the tours provider:
- Abstract interfaces that define the connector and normalizer contracts
- The concrete Bokun implementation
"""

from . import interfaces

__all__ = [
    'interfaces',
]
