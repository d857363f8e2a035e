"""Order retrieval & update service with on-the-fly currency conversion."""

__version__ = "0.1.0"
