"""
Tours Bridge - backend bridge between a tours listing UI and the Bokun activities API.

This package translates paginated search and detail requests into provider
calls, normalizes the provider's loosely-structured activity records into a
stable tour schema, and returns consistent errors.
"""

__version__ = "0.1.0"
