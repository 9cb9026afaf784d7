"""Traffic-state feed ingestion."""

from .feed_parser import parse_header_timestamp, parse_states
from .opensky import FetchController

__all__ = ["FetchController", "parse_header_timestamp", "parse_states"]
