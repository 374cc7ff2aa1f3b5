"""Infrastructure layer for the Tours Bridge service."""
