"""
Unit tests for the tickers page renderer
"""

from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import patch

from tickers_generator.errors import EmptyResultError, ErrorKind
from tickers_generator.renderer.html_renderer import (
    CountryTickers,
    HtmlRenderer,
    build_view_model,
    format_generation_date,
    render_html,
)

SCREENER_URL = "https://finviz.com/screener.ashx?v=111&t="
GENERATED_AT = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


class TestFormatGenerationDate:
    def test_short_month_format(self):
        assert format_generation_date(GENERATED_AT) == "Oct 19, 2026"

    def test_converted_to_utc(self):
        # 01:00 on the 1st in UTC+2 is still the previous day in UTC
        local = datetime(2026, 3, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_generation_date(local) == "Feb 28, 2026"

    def test_single_digit_day_not_padded(self):
        assert format_generation_date(datetime(2026, 1, 5, tzinfo=timezone.utc)) == "Jan 5, 2026"


class TestBuildViewModel:
    def test_empty_instruments_fail(self):
        with pytest.raises(EmptyResultError) as exc_info:
            build_view_model([], SCREENER_URL)

        assert exc_info.value.message == "HTML renderer got 0 instruments"
        assert exc_info.value.kind == ErrorKind.EMPTY_RESULT

    def test_groups_by_type_then_country(self, instruments):
        view_model = build_view_model(instruments, SCREENER_URL, now=GENERATED_AT)

        assert view_model.generation_date == "Oct 19, 2026"
        assert [group.instrument_type for group in view_model.instrument_types] == ["Stock", "ETF", "Bond"]

        stock = view_model.instrument_types[0]
        assert stock.countries == [
            CountryTickers(country="US", tickers="AAPL, BRK-A, BRK-B", screener_tickers="AAPL,BRK-A,BRK-B"),
            CountryTickers(country="HU", tickers="OTP", screener_tickers="OTP"),
        ]

    def test_static_values_passed_through(self, instruments):
        view_model = build_view_model(instruments, SCREENER_URL, ga_tracking_id="G-TEST123")

        assert view_model.screener_url == SCREENER_URL
        assert view_model.ga_tracking_id == "G-TEST123"

    def test_tracking_id_optional(self, instruments):
        assert build_view_model(instruments, SCREENER_URL).ga_tracking_id is None


class TestHtmlRenderer:
    def test_renders_tables(self, instruments):
        view_model = build_view_model(instruments, SCREENER_URL, now=GENERATED_AT)

        html = HtmlRenderer().render(view_model)

        assert html.startswith("<!DOCTYPE html>")
        assert "Generated: Oct 19, 2026" in html
        assert "<h2 id=\"Stock\">Stock</h2>" in html
        assert "AAPL, BRK-A, BRK-B" in html
        assert "t=AAPL,BRK-A,BRK-B\"" in html

    def test_screener_url_is_escaped(self, instruments):
        html = HtmlRenderer().render(build_view_model(instruments, SCREENER_URL))

        assert "screener.ashx?v=111&amp;t=CSPX" in html

    def test_analytics_only_when_configured(self, instruments):
        renderer = HtmlRenderer()

        without_ga = renderer.render(build_view_model(instruments, SCREENER_URL))
        with_ga = renderer.render(build_view_model(instruments, SCREENER_URL, ga_tracking_id="G-TEST123"))

        assert "googletagmanager" not in without_ga
        assert "gtag/js?id=G-TEST123" in with_ga

    def test_feed_values_are_escaped(self):
        from tickers_generator.models import Instrument

        instrument = Instrument.from_row(["<b>", "Bold Co", "Bold Company", "US0378331005", "<i>Stock"])
        html = HtmlRenderer().render(build_view_model([instrument], SCREENER_URL))

        assert "<b>" not in html
        assert "&lt;b&gt;" in html
        assert "&lt;i&gt;Stock" in html

    def test_custom_template_dir(self, instruments, tmp_path):
        (tmp_path / "tickers.html.j2").write_text(
            "{% for t in page.instrument_types %}{{ t.instrument_type }};{% endfor %}", encoding="utf-8"
        )

        html = HtmlRenderer(tmp_path).render(build_view_model(instruments, SCREENER_URL))

        assert html == "Stock;ETF;Bond;"


class TestRenderHtml:
    def test_empty_input_does_no_template_work(self):
        with patch.object(HtmlRenderer, "render") as mock_render:
            with pytest.raises(EmptyResultError):
                render_html([], SCREENER_URL)

        mock_render.assert_not_called()

    def test_renders_in_one_step(self, instruments):
        html = render_html(instruments, SCREENER_URL)
        assert "BRK-A, BRK-B" in html
