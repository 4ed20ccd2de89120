"""
Renderer Module

Turns selected instruments into the static tickers HTML page.
"""

from .html_renderer import (
    CountryTickers,
    HtmlRenderer,
    InstrumentTypeGroup,
    TickersViewModel,
    build_view_model,
    format_generation_date,
    render_html,
)

__all__ = [
    'CountryTickers',
    'HtmlRenderer',
    'InstrumentTypeGroup',
    'TickersViewModel',
    'build_view_model',
    'format_generation_date',
    'render_html'
]
