"""
Interfaces package for the Tours Bridge service.

Abstract contracts the provider integration implements.
"""

from .connector import APIConnector, HttpMethod
from .normalizer import DataNormalizer

__all__ = [
    'APIConnector',
    'HttpMethod',
    'DataNormalizer',
]
