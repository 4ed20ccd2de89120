"""
Instrument Feed Validator

Parses the raw feed body and validates it into Instrument records.

Validation is fail-fast: the first invalid row aborts the whole run and no
partial result is returned. Within a row, fields are checked in the order
ticker, short name, long name, ISIN code, type, and only the first failure
is reported.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..errors import InstrumentError, ParseError
from ..models import FIELD_LABELS, INSTRUMENT_ROW_LENGTH, Instrument

logger = logging.getLogger(__name__)

FeedBody = Union[str, bytes, bytearray, Dict[str, Any]]


def parse_feed_body(body: FeedBody) -> Any:
    """Decode the feed body; any well-formed JSON document is returned as is"""
    if isinstance(body, dict):
        return body

    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        raise ParseError(f"feed body is not valid JSON: {e}", body) from e

    return payload


def _is_row_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def validate_instrument_row(instrument_row: Any) -> Instrument:
    """
    Validate a single feed row and build its Instrument.

    Raises:
        InstrumentError: 'invalid instrument row' for a wrong shape, or
            'invalid instrument <field>' for the first failing field
    """
    if not _is_row_sequence(instrument_row) or len(instrument_row) != INSTRUMENT_ROW_LENGTH:
        raise InstrumentError('invalid instrument row', instrument_row)

    row_dict = Instrument.row_to_dict(instrument_row)
    try:
        return Instrument.model_validate(row_dict)
    except ValidationError as e:
        # Errors are reported in field declaration order
        field = e.errors()[0]['loc'][0]
        raise InstrumentError(f"invalid instrument {FIELD_LABELS[field]}", row_dict[field]) from e


def validate_instruments(body: FeedBody, logger: Optional[logging.Logger] = None) -> List[Instrument]:
    """
    Parse and validate the instrument feed.

    Args:
        body: Raw response body (str or UTF-8 bytes), or an already decoded payload
        logger: Logger to report progress to

    Returns:
        List[Instrument]: Instruments in feed order

    Raises:
        ParseError: Body is not valid JSON
        InstrumentError: Data or any row is invalid
    """
    logger = logger or logging.getLogger(__name__)
    logger.info("Validating instrument feed")

    payload = parse_feed_body(body)
    data = payload.get('data') if isinstance(payload, dict) else None

    if not _is_row_sequence(data) or not data:
        raise InstrumentError('invalid data', data)

    instruments = [validate_instrument_row(instrument_row) for instrument_row in data]

    logger.info(f"Validated {len(instruments)} instruments")
    return instruments
