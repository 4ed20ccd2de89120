"""
Instrument Selector

Filters validated instruments down to the types that go on the page.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from ..models import Instrument

logger = logging.getLogger(__name__)

# Feed labels for stocks and ETFs
DEFAULT_INSTRUMENT_TYPES: List[str] = ['Részvény', 'ETF']


def select_instruments(
    instruments: Sequence[Instrument],
    allowed_types: Iterable[str] = DEFAULT_INSTRUMENT_TYPES,
    logger: Optional[logging.Logger] = None,
) -> List[Instrument]:
    """
    Keep instruments whose type is in the allow-list.

    Matching is exact and case-sensitive; feed order is preserved. An empty
    result is returned as-is, the caller decides whether that is an error.
    """
    logger = logger or logging.getLogger(__name__)
    allowed = set(allowed_types)

    selected = [instrument for instrument in instruments if instrument.type in allowed]

    logger.info(f"Selected {len(selected)} of {len(instruments)} instruments (types: {sorted(allowed)})")
    return selected
