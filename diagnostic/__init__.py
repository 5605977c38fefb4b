"""Marketing diagnostic engine: reverse-funnel targets and recommendations."""

__version__ = "0.1.0"
