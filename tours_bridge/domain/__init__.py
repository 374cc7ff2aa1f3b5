"""
Domain package for the Tours Bridge service.

Contains the canonical tour schema and the inbound search request, independent
of the provider's wire format and of the web framework.
"""
