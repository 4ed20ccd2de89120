"""
Instrument Services Module

Selection and classification of validated instruments.
"""

from .instrument_classifier import (
    InstrumentClassifier,
    countries_for_type,
    distinct_types,
    normalize_ticker,
    tickers_for_type_and_country,
)
from .instrument_selector import DEFAULT_INSTRUMENT_TYPES, select_instruments

__all__ = [
    'InstrumentClassifier',
    'countries_for_type',
    'distinct_types',
    'normalize_ticker',
    'tickers_for_type_and_country',
    'DEFAULT_INSTRUMENT_TYPES',
    'select_instruments'
]
