"""
Unit tests for the Instrument model
"""

import pytest
from pydantic import ValidationError

from tickers_generator.models import (
    INSTRUMENT_ROW_FIELDS,
    Instrument,
    is_valid_isin_code,
)


class TestIsinCode:
    """Test ISIN code matching"""

    def test_accepts_valid_isin(self):
        assert is_valid_isin_code("US0378331005")
        assert is_valid_isin_code("IE00B5BMR087")

    @pytest.mark.parametrize("isin_code", [
        "US037833100",     # too short
        "US03783310051",   # too long
        "us0378331005",    # lowercase country
        "US03783310a5",    # lowercase body
        "US037833100X",    # non-digit check character
        "1S0378331005",    # digit in country code
        "US0378331005\n",  # trailing newline
        "",
    ])
    def test_rejects_invalid_isin(self, isin_code):
        assert not is_valid_isin_code(isin_code)

    def test_rejects_non_string(self):
        assert not is_valid_isin_code(378331005)
        assert not is_valid_isin_code(None)


class TestInstrument:
    """Test Instrument model"""

    def test_from_row(self):
        """Test positional row mapping"""
        instrument = Instrument.from_row(["AAPL", "Apple", "Apple Inc.", "US0378331005", "Stock"])

        assert instrument.ticker == "AAPL"
        assert instrument.short_name == "Apple"
        assert instrument.long_name == "Apple Inc."
        assert instrument.isin_code == "US0378331005"
        assert instrument.type == "Stock"

    def test_country_is_isin_prefix(self):
        instrument = Instrument.from_row(["OTP", "OTP Bank", "OTP Bank Nyrt.", "HU0000061726", "Stock"])
        assert instrument.country == "HU"

    def test_to_row_round_trip(self):
        row = ["CSPX", "iShares S&P 500", "iShares Core S&P 500 UCITS ETF", "IE00B5BMR087", "ETF"]
        assert Instrument.from_row(row).to_row() == row

    def test_frozen(self, instruments):
        with pytest.raises(ValidationError):
            instruments[0].ticker = "MSFT"

    def test_empty_type_allowed(self):
        instrument = Instrument.from_row(["AAPL", "Apple", "Apple Inc.", "US0378331005", ""])
        assert instrument.type == ""

    def test_numbers_are_not_coerced(self):
        with pytest.raises(ValidationError):
            Instrument.from_row([123, "Apple", "Apple Inc.", "US0378331005", "Stock"])

    def test_field_order_matches_row_layout(self):
        assert list(Instrument.model_fields) == INSTRUMENT_ROW_FIELDS
