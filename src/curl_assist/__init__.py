"""curl-assist: parsing, linting and completion for curl command text."""

__version__ = "0.1.0"
