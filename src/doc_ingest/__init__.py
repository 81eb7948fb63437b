"""Documentation ingestion: crawl sites and repositories into entry trees."""

__version__ = "0.1.0"
