"""Route sequencing services."""

from .sequencer import address_distance, sequence_stops, stop_distance

__all__ = ["sequence_stops", "stop_distance", "address_distance"]
