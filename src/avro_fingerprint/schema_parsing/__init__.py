"""Schema parsing exports."""

from .schema_parser import parse, round_trip

__all__ = ["parse", "round_trip"]
