"""
Services package for the Tours Bridge service.

Services orchestrate one inbound request: they translate it into a provider
call through a connector and shape the result through a normalizer, depending
on the adapter interfaces rather than on the concrete provider classes.
"""

from tours_bridge.services.tour_service import TourService

__all__ = ["TourService"]
