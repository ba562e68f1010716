"""Remoteness Scoring API.

This package contains the Python service that estimates a remoteness
surcharge for ZIP codes and pickup/delivery trips.

Architecture:
- Location store: in-memory reference dataset with atomic hot reload
- Scoring engine: pure functions from record + month to score, category, surcharge
- Trip aggregator: sums the surcharges of two independently scored endpoints
- Flask app: thin HTTP layer over the three
"""

__version__ = "1.0.0"
