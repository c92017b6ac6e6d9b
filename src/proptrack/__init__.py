"""PropTrack: track real-estate listings, import them in bulk, and map them."""

__version__ = "0.1.0"
