"""Risk scoring for pharmacy prices and production batches."""

__version__ = "1.0.0"
