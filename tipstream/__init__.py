"""tipstream - tip tier suggestions and payment analytics for live streams."""

__version__ = "2.0.0"
