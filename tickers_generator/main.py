#!/usr/bin/env python3
"""
Tickers Generator - Main Entry Point

Runs one fetch-transform-publish cycle:
    feed -> validate -> select -> render -> publish to GCS

Each stage consumes the complete output of the previous one and any failure
aborts the remaining stages.

Usage:
    python -m tickers_generator
    python -m tickers_generator --output ./tickers.html
    python -m tickers_generator --types ETF Részvény --log-level DEBUG
"""

import argparse
import logging
import platform
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Config, get_config
from .data_downloader.feed_client import FeedClient
from .errors import ErrorContext, ErrorKind, PublishError, TickersGeneratorError
from .instrument_services.instrument_selector import select_instruments
from .publisher.gcs_publisher import TickersGCSPublisher
from .renderer.html_renderer import HtmlRenderer, build_view_model
from .utils.logger import (
    PerformanceLogger,
    RunLogger,
    StageLogger,
    log_data_processing,
    log_operation_failure,
    log_operation_start,
    log_operation_success,
    log_event,
    setup_structured_logging,
)
from .validation.instrument_validator import validate_instruments

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one generation run"""
    success: bool
    instrument_count: int = 0
    gcs_path: Optional[str] = None
    html: Optional[str] = None
    error: Optional[TickersGeneratorError] = None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None


class TickersGenerator:
    """Sequential tickers page pipeline"""

    def __init__(
        self,
        config: Config,
        feed_client: Optional[FeedClient] = None,
        publisher: Optional[TickersGCSPublisher] = None,
        renderer: Optional[HtmlRenderer] = None,
        logger: Optional[StageLogger] = None,
        run_id: Optional[str] = None,
    ):
        self.config = config
        self.run_id = run_id or uuid.uuid4().hex
        self.logger = logger or RunLogger(logging.getLogger(__name__), run_id=self.run_id)
        self.feed_client = feed_client or FeedClient(
            config.feed.data_url, timeout=config.feed.timeout, logger=self.logger
        )
        self.renderer = renderer or HtmlRenderer(config.page.template_dir)
        self._publisher = publisher

    @property
    def publisher(self) -> TickersGCSPublisher:
        """GCS publisher, created on first use so local runs need no credentials"""
        if self._publisher is None:
            if not self.config.gcp.bucket:
                raise PublishError("GCS bucket is required to publish - set GCS_BUCKET environment variable")
            self._publisher = TickersGCSPublisher(
                self.config.gcp.bucket,
                object_name=self.config.gcp.object_name,
                project=self.config.gcp.project_id,
                upload_timeout=self.config.gcp.upload_timeout,
                logger=self.logger,
            )
        return self._publisher

    def generate_html(self) -> GenerationResult:
        """Fetch, validate, select and render; raises on the first failing stage"""
        with PerformanceLogger(self.logger, 'fetch_feed'):
            body = self.feed_client.fetch()

        instruments = validate_instruments(body, logger=self.logger)
        log_data_processing(self.logger, 'validate_instruments', len(instruments))

        selected = select_instruments(instruments, self.config.feed.instrument_types, logger=self.logger)
        log_data_processing(self.logger, 'select_instruments', len(selected))

        with PerformanceLogger(self.logger, 'render_html'):
            view_model = build_view_model(
                selected,
                screener_url=self.config.page.screener_url,
                ga_tracking_id=self.config.page.ga_tracking_id,
            )
            html = self.renderer.render(view_model)

        return GenerationResult(success=True, instrument_count=len(selected), html=html)

    def run(self, publish: bool = True) -> GenerationResult:
        """
        Run the full cycle.

        Generator errors are logged and reported in the result rather than
        raised; anything else propagates.
        """
        log_operation_start(self.logger, 'tickers generation', publish=publish)

        try:
            # Resolve the publisher first so a missing bucket fails before the download
            publisher = self.publisher if publish else None
            result = self.generate_html()
            if publisher is not None:
                with PerformanceLogger(self.logger, 'publish_html'):
                    result.gcs_path = publisher.publish(result.html)
        except TickersGeneratorError as e:
            e.context = ErrorContext(operation='tickers generation', component=__name__, run_id=self.run_id)
            log_operation_failure(self.logger, 'tickers generation', e, error_details=e.to_dict())
            return GenerationResult(success=False, error=e)

        log_operation_success(
            self.logger,
            'tickers generation',
            instrument_count=result.instrument_count,
            gcs_path=result.gcs_path,
        )
        return result


def log_startup(config: Config, run_logger: StageLogger):
    """Log the runtime environment of this invocation"""
    log_event(
        run_logger,
        logging.INFO,
        'starting',
        version=__version__,
        python_version=platform.python_version(),
        platform=sys.platform,
        architecture=platform.machine(),
        gcs_bucket=config.gcp.bucket,
        google_analytics_enabled=bool(config.page.ga_tracking_id),
    )


def handler(event=None, context=None) -> str:
    """
    Scheduled trigger entry (Cloud Functions / Cloud Run job).

    Raises the generator error on failure so the scheduler records the run
    as failed.
    """
    config = get_config()
    run_id = getattr(context, 'event_id', None) or uuid.uuid4().hex
    run_logger = setup_structured_logging(
        log_level=config.service.log_level,
        run_id=run_id,
        gcp_logging=config.gcp_logging,
    )
    log_startup(config, run_logger)

    result = TickersGenerator(config, logger=run_logger, run_id=run_id).run(publish=True)
    if not result.success:
        raise result.error

    return 'tickers generated'


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate the tickers HTML page and publish it to GCS"
    )
    parser.add_argument('--config', help='Path to YAML config file')
    parser.add_argument('--output', help='Write the page to this file instead of publishing')
    parser.add_argument('--types', nargs='+', help='Instrument types to include (overrides INSTRUMENT_TYPES)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (overrides LOG_LEVEL)')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = get_config(args.config)

    if args.types:
        config.feed.instrument_types = args.types
    if args.log_level:
        config.service.log_level = args.log_level

    run_id = uuid.uuid4().hex
    run_logger = setup_structured_logging(
        log_level=config.service.log_level,
        run_id=run_id,
        gcp_logging=config.gcp_logging,
    )
    log_startup(config, run_logger)

    generator = TickersGenerator(config, logger=run_logger, run_id=run_id)
    result = generator.run(publish=args.output is None)

    if not result.success:
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.html, encoding='utf-8')
        run_logger.info(f"Wrote tickers page to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
