"""Real-time departures, stops and lines from a transit-data aggregation API."""

__version__ = "0.1.0"
