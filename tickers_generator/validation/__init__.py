"""
Validation Module

Parses the raw instrument feed and validates it into Instrument records.
"""

from .instrument_validator import parse_feed_body, validate_instrument_row, validate_instruments

__all__ = [
    'parse_feed_body',
    'validate_instrument_row',
    'validate_instruments'
]
