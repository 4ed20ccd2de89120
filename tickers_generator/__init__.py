"""
Tickers Generator

Scheduled batch job that turns the remote instrument feed into a static HTML
page of tickers, grouped by instrument type and listing country, and
publishes it to a public GCS bucket.

Key Features:
- Fail-fast validation of the positional instrument feed
- Type allow-list selection
- Classification by instrument type and ISIN country prefix
- Jinja2 rendering and GCS upload
- Structured JSON logging

Usage:
    from tickers_generator import TickersGenerator
    from tickers_generator.config import get_config

    result = TickersGenerator(get_config()).run(publish=False)
    print(result.html)

    # Command line
    python -m tickers_generator --output ./tickers.html
"""

__version__ = "1.0.0"
__description__ = "Static tickers page generator for the instrument feed"

from .errors import (
    EmptyResultError,
    ErrorKind,
    FeedError,
    InstrumentError,
    ParseError,
    PublishError,
    TickersGeneratorError,
)
from .models import Instrument
from .validation import validate_instruments
from .instrument_services import InstrumentClassifier, select_instruments
from .renderer import HtmlRenderer, build_view_model, render_html


def get_tickers_generator():
    """Get TickersGenerator with lazy import"""
    from .main import TickersGenerator
    return TickersGenerator


def __getattr__(name):
    if name == 'TickersGenerator':
        return get_tickers_generator()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version info
    "__version__",
    "__description__",

    # Model
    "Instrument",

    # Errors
    "ErrorKind",
    "TickersGeneratorError",
    "ParseError",
    "InstrumentError",
    "EmptyResultError",
    "FeedError",
    "PublishError",

    # Pipeline stages
    "validate_instruments",
    "select_instruments",
    "InstrumentClassifier",
    "build_view_model",
    "render_html",
    "HtmlRenderer",

    # Runner
    "TickersGenerator",
]
