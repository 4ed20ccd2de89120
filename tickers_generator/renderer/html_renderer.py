"""
HTML Renderer for the Tickers Page

Assembles the view model (one ticker table per instrument type per listing
country) and expands it through a Jinja2 template. All grouping logic lives
in the view model; the template only lays it out.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..errors import EmptyResultError
from ..instrument_services.instrument_classifier import InstrumentClassifier
from ..models import Instrument

logger = logging.getLogger(__name__)

TEMPLATE_NAME_TICKERS = 'tickers.html.j2'
DEFAULT_TEMPLATE_DIR = Path(__file__).parent.parent / 'templates'


@dataclass(frozen=True)
class CountryTickers:
    """Tickers of one instrument type listed in one country"""
    country: str
    tickers: str  # display form, 'BRK-A, BRK-B'
    screener_tickers: str  # query form, 'BRK-A,BRK-B'


@dataclass(frozen=True)
class InstrumentTypeGroup:
    """All countries for one instrument type"""
    instrument_type: str
    countries: List[CountryTickers] = field(default_factory=list)


@dataclass(frozen=True)
class TickersViewModel:
    """Everything the template needs, fully derived"""
    generation_date: str
    instrument_types: List[InstrumentTypeGroup]
    screener_url: str
    ga_tracking_id: Optional[str] = None


def format_generation_date(now: Optional[datetime] = None) -> str:
    """UTC date in short month form, e.g. 'Oct 19, 2026'"""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{now:%b} {now.day}, {now.year}"


def build_view_model(
    instruments: Sequence[Instrument],
    screener_url: str,
    ga_tracking_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TickersViewModel:
    """
    Bind classified instruments into the template view model.

    Raises:
        EmptyResultError: No instruments were given
    """
    if not instruments:
        raise EmptyResultError('HTML renderer got 0 instruments', list(instruments))

    classifier = InstrumentClassifier(instruments)

    instrument_types = [
        InstrumentTypeGroup(
            instrument_type=instrument_type,
            countries=[
                CountryTickers(
                    country=country,
                    tickers=classifier.tickers_for_type_and_country(instrument_type, country),
                    screener_tickers=classifier.tickers_for_type_and_country(
                        instrument_type, country, with_spacing=False
                    ),
                )
                for country in classifier.countries_for_type(instrument_type)
            ],
        )
        for instrument_type in classifier.distinct_types()
    ]

    return TickersViewModel(
        generation_date=format_generation_date(now),
        instrument_types=instrument_types,
        screener_url=screener_url,
        ga_tracking_id=ga_tracking_id,
    )


class HtmlRenderer:
    """Expands the tickers view model into an HTML document"""

    template_name: str = TEMPLATE_NAME_TICKERS

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(['html', 'xml', 'html.j2']),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, view_model: TickersViewModel) -> str:
        """Render the page for a prepared view model"""
        template = self.env.get_template(self.template_name)
        html = template.render(page=view_model)
        logger.info(f"Rendered tickers page ({len(html)} characters, {len(view_model.instrument_types)} types)")
        return html


def render_html(
    instruments: Sequence[Instrument],
    screener_url: str,
    ga_tracking_id: Optional[str] = None,
    template_dir: Optional[Union[str, Path]] = None,
) -> str:
    """Build the view model and render it in one step"""
    view_model = build_view_model(instruments, screener_url, ga_tracking_id)
    return HtmlRenderer(template_dir).render(view_model)
