"""
Data Models for Tickers Generator

The Instrument model mirrors one row of the instrument feed. Rows arrive as
fixed-width positional lists: ticker, short name, long name, ISIN code, type.
"""

import logging
import re
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Two-letter country prefix, nine alphanumerics, one numeric check digit
ISIN_CODE_REGEX = re.compile(r'^([A-Z]{2})[A-Z0-9]{9}\d{1}$', re.ASCII)

# Positional layout of a feed row
INSTRUMENT_ROW_FIELDS: List[str] = ['ticker', 'short_name', 'long_name', 'isin_code', 'type']
INSTRUMENT_ROW_LENGTH = len(INSTRUMENT_ROW_FIELDS)

# Field names as they appear in validation error messages
FIELD_LABELS: Dict[str, str] = {
    'ticker': 'ticker',
    'short_name': 'short name',
    'long_name': 'long name',
    'isin_code': 'ISIN code',
    'type': 'type',
}


def is_valid_isin_code(value: Any) -> bool:
    """Check that value is a string fully matching the ISIN pattern"""
    return isinstance(value, str) and ISIN_CODE_REGEX.fullmatch(value) is not None


class Instrument(BaseModel):
    """
    A tradable security as described by the feed.

    Field declaration order is the validation order: when a row breaks several
    constraints the first reported error belongs to the earliest field.
    """

    model_config = ConfigDict(frozen=True)

    ticker: str = Field(..., strict=True, min_length=1, max_length=12, description="Trading symbol")
    short_name: str = Field(..., strict=True, min_length=2, max_length=24, description="Short display name")
    long_name: str = Field(..., strict=True, min_length=2, max_length=64, description="Full instrument name")
    isin_code: str = Field(..., strict=True, description="ISIN code, country prefix first")
    type: str = Field(..., strict=True, max_length=24, description="Instrument classification (e.g. ETF)")

    @field_validator('isin_code')
    @classmethod
    def validate_isin_code(cls, v):
        """Validate ISIN code format"""
        if not is_valid_isin_code(v):
            raise ValueError(f"Invalid ISIN code format: {v}")
        return v

    @property
    def country(self) -> str:
        """Listing country, taken from the ISIN prefix"""
        return self.isin_code[:2]

    @classmethod
    def row_to_dict(cls, instrument_row: Sequence[Any]) -> Dict[str, Any]:
        """Map a positional feed row onto field names"""
        return dict(zip(INSTRUMENT_ROW_FIELDS, instrument_row))

    @classmethod
    def from_row(cls, instrument_row: Sequence[Any]) -> 'Instrument':
        """Create an Instrument from a positional feed row (validates)"""
        return cls.model_validate(cls.row_to_dict(instrument_row))

    def to_row(self) -> List[str]:
        """Convert back to the feed's positional layout"""
        return [getattr(self, name) for name in INSTRUMENT_ROW_FIELDS]
