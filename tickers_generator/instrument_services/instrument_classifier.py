"""
Instrument Classifier

Derives the groupings the tickers page is laid out by: distinct instrument
types, the listing countries per type (taken from the ISIN prefix) and the
tickers belonging to each (type, country) pair.

All views preserve first-seen feed order and deduplicate.
"""

import logging
from typing import List, Sequence

import pandas as pd

from ..models import Instrument

logger = logging.getLogger(__name__)

CLASSIFIER_COLUMNS = ['ticker', 'type', 'country']


def normalize_ticker(ticker: str) -> str:
    """Replace spaces so multi-word tickers (e.g. 'BRK B') stay one token"""
    return ticker.replace(' ', '-')


class InstrumentClassifier:
    """Index over a set of instruments for type/country lookups"""

    def __init__(self, instruments: Sequence[Instrument]):
        self.df = pd.DataFrame(
            [[instrument.ticker, instrument.type, instrument.country] for instrument in instruments],
            columns=CLASSIFIER_COLUMNS,
        )
        logger.debug(f"Indexed {len(self.df)} instruments for classification")

    def distinct_types(self) -> List[str]:
        """Unique instrument types in first-seen order"""
        return self.df['type'].unique().tolist()

    def countries_for_type(self, instrument_type: str) -> List[str]:
        """Unique listing countries among instruments of the given type"""
        return self.df.loc[self.df['type'] == instrument_type, 'country'].unique().tolist()

    def tickers_for_type_and_country(
        self,
        instrument_type: str,
        country: str,
        with_spacing: bool = True,
    ) -> str:
        """
        Comma-joined normalized tickers for a (type, country) pair.

        Args:
            instrument_type: Exact instrument type
            country: Two-letter ISIN country prefix
            with_spacing: Put a space after each comma (display form)

        Returns:
            str: e.g. 'BRK-A, BRK-B', or '' when nothing matches
        """
        mask = (self.df['type'] == instrument_type) & (self.df['country'] == country)
        separator = ', ' if with_spacing else ','
        return separator.join(normalize_ticker(ticker) for ticker in self.df.loc[mask, 'ticker'])


def distinct_types(instruments: Sequence[Instrument]) -> List[str]:
    return InstrumentClassifier(instruments).distinct_types()


def countries_for_type(instruments: Sequence[Instrument], instrument_type: str) -> List[str]:
    return InstrumentClassifier(instruments).countries_for_type(instrument_type)


def tickers_for_type_and_country(
    instruments: Sequence[Instrument],
    instrument_type: str,
    country: str,
    with_spacing: bool = True,
) -> str:
    return InstrumentClassifier(instruments).tickers_for_type_and_country(
        instrument_type, country, with_spacing
    )
