"""
Configuration Management for Tickers Generator

Settings come from three layers, later ones winning: a .env file in the
working directory, an optional YAML config file, and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .data_downloader.feed_client import DEFAULT_DATA_URL
from .instrument_services.instrument_selector import DEFAULT_INSTRUMENT_TYPES
from .publisher.gcs_publisher import DEFAULT_OBJECT_NAME

DEFAULT_SCREENER_URL = 'https://finviz.com/screener.ashx?v=111&t='


@dataclass
class FeedConfig:
    """Instrument feed configuration"""
    data_url: str = DEFAULT_DATA_URL
    timeout: int = 30
    instrument_types: List[str] = field(default_factory=lambda: list(DEFAULT_INSTRUMENT_TYPES))

    def __post_init__(self):
        """Validate feed configuration"""
        validation_errors = []

        if not self.data_url:
            validation_errors.append("Feed URL is required - set DATA_URL environment variable")
        elif not self.data_url.startswith(('http://', 'https://')):
            validation_errors.append(f"Feed URL must be http(s): '{self.data_url}'")

        if self.timeout <= 0:
            validation_errors.append(f"Timeout must be positive, got {self.timeout}")

        if not self.instrument_types:
            validation_errors.append("At least one instrument type must be selected - set INSTRUMENT_TYPES")

        if validation_errors:
            error_message = "Feed configuration validation failed:\n" + "\n".join(f"  - {error}" for error in validation_errors)
            raise ValueError(error_message)


@dataclass
class GCPConfig:
    """Google Cloud Platform configuration"""
    bucket: str = ""
    object_name: str = DEFAULT_OBJECT_NAME
    project_id: Optional[str] = None
    upload_timeout: int = 60

    def __post_init__(self):
        """Validate GCP configuration"""
        validation_errors = []

        # Bucket may be empty when the page is only written locally
        if self.bucket:
            if not self.bucket.replace('-', '').replace('_', '').replace('.', '').isalnum():
                validation_errors.append(f"GCS bucket name contains invalid characters: '{self.bucket}'")
            elif len(self.bucket) < 3 or len(self.bucket) > 63:
                validation_errors.append(f"GCS bucket name must be 3-63 characters long, got {len(self.bucket)}")

        if not self.object_name:
            validation_errors.append("GCS object name is required")

        if self.upload_timeout <= 0:
            validation_errors.append(f"Upload timeout must be positive, got {self.upload_timeout}")

        if validation_errors:
            error_message = "GCP configuration validation failed:\n" + "\n".join(f"  - {error}" for error in validation_errors)
            raise ValueError(error_message)


@dataclass
class PageConfig:
    """Rendered page configuration"""
    screener_url: str = DEFAULT_SCREENER_URL
    ga_tracking_id: Optional[str] = None
    template_dir: Optional[str] = None


@dataclass
class ServiceConfig:
    """Service configuration"""
    log_level: str = "INFO"
    log_destination: str = "local"  # 'local', 'gcp', 'both'

    def __post_init__(self):
        """Validate service configuration"""
        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(f"Invalid log level: {self.log_level}")

        valid_destinations = ['local', 'gcp', 'both']
        if self.log_destination not in valid_destinations:
            raise ValueError(f"Invalid log destination: {self.log_destination}")


@dataclass
class Config:
    """Main configuration class"""
    feed: FeedConfig = field(default_factory=FeedConfig)
    gcp: GCPConfig = field(default_factory=GCPConfig)
    page: PageConfig = field(default_factory=PageConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)

    @property
    def gcp_logging(self) -> bool:
        return self.service.log_destination in ('gcp', 'both')


class ConfigManager:
    """Configuration manager for loading and validating settings"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or self._find_config_file()
        self._config: Optional[Config] = None

        env_file = Path.cwd() / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            logging.info(f"Loaded environment variables from {env_file}")

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations"""
        config_paths = [
            Path.cwd() / "config.yaml",
            Path.home() / ".tickers-generator" / "config.yaml",
            Path("/etc/tickers-generator/config.yaml")
        ]

        for path in config_paths:
            if path.exists():
                return str(path)

        return None

    def load_config(self) -> Config:
        """Load configuration from file and environment variables"""
        if self._config is not None:
            return self._config

        file_config = {}
        if self.config_file and Path(self.config_file).exists():
            file_config = self._load_from_file(self.config_file)

        env_config = self._load_from_env()

        # Merge per section (env overrides file)
        config_dict: Dict[str, Dict[str, Any]] = {}
        for section in ('feed', 'gcp', 'page', 'service'):
            config_dict[section] = {**(file_config.get(section) or {}), **env_config.get(section, {})}

        self._config = self._create_config(config_dict)
        return self._config

    def _load_from_file(self, config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        with open(config_file, 'r') as f:
            loaded = yaml.safe_load(f) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping, got {type(loaded).__name__}")

        logging.info(f"Loaded configuration from {config_file}")
        return loaded

    def _load_from_env(self) -> Dict[str, Dict[str, Any]]:
        """Load configuration from environment variables (only those set)"""
        env_map = {
            'feed': {
                'data_url': ('DATA_URL', str),
                'timeout': ('FEED_TIMEOUT', int),
                'instrument_types': ('INSTRUMENT_TYPES', _parse_list),
            },
            'gcp': {
                'bucket': ('GCS_BUCKET', str),
                'object_name': ('GCS_OBJECT_NAME', str),
                'project_id': ('GCP_PROJECT_ID', str),
                'upload_timeout': ('GCS_UPLOAD_TIMEOUT', int),
            },
            'page': {
                'screener_url': ('SCREENER_URL', str),
                'ga_tracking_id': ('GA_TRACKING_ID', str),
                'template_dir': ('TEMPLATE_DIR', str),
            },
            'service': {
                'log_level': ('LOG_LEVEL', str),
                'log_destination': ('LOG_DESTINATION', str),
            },
        }

        config: Dict[str, Dict[str, Any]] = {}
        for section, keys in env_map.items():
            for key, (env_name, cast) in keys.items():
                value = os.getenv(env_name)
                if value is not None and value != '':
                    config.setdefault(section, {})[key] = cast(value)

        return config

    def _create_config(self, config_dict: Dict[str, Dict[str, Any]]) -> Config:
        """Create Config object from dictionary"""
        feed = config_dict.get('feed', {})
        instrument_types = feed.get('instrument_types', DEFAULT_INSTRUMENT_TYPES)
        if isinstance(instrument_types, str):
            instrument_types = _parse_list(instrument_types)

        return Config(
            feed=FeedConfig(
                data_url=feed.get('data_url', DEFAULT_DATA_URL),
                timeout=int(feed.get('timeout', 30)),
                instrument_types=list(instrument_types),
            ),
            gcp=GCPConfig(**config_dict.get('gcp', {})),
            page=PageConfig(**config_dict.get('page', {})),
            service=ServiceConfig(**config_dict.get('service', {})),
        )


def _parse_list(value: str) -> List[str]:
    """Parse a comma-separated list, dropping blanks"""
    return [item.strip() for item in value.split(',') if item.strip()]


_config_manager: Optional[ConfigManager] = None


def get_config(config_file: Optional[str] = None) -> Config:
    """Get the process configuration, loading it on first use"""
    global _config_manager
    if _config_manager is None or (config_file and config_file != _config_manager.config_file):
        _config_manager = ConfigManager(config_file)
    return _config_manager.load_config()


def reload_config(config_file: Optional[str] = None) -> Config:
    """Reload configuration from sources"""
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager.load_config()
