"""In-memory state shared between the tracker and status readers."""

from pyfindme.state.cache import LocationCache

__all__ = ["LocationCache"]
