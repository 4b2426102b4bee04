"""
Configurable logging setup for the gateway.

Loads the logging configuration from a YAML dictConfig file.
"""
import logging
import logging.config
from pathlib import Path
from typing import Optional, Union

import yaml

from gateway.middleware.request_id import RequestIDFilter

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def _basic_config(default_level: int) -> None:
    logging.basicConfig(level=default_level, format=DEFAULT_FORMAT)
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIDFilter())


def setup_logging(config_path: Optional[Union[str, Path]] = None, default_level: int = logging.INFO):
    """
    Configure logging from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.
                     If None, uses gateway/config/logging_config.yaml
        default_level: Level used when the configuration cannot be loaded
    """
    if config_path is None:
        config_dir = Path(__file__).parent
        config_path = config_dir / "logging_config.yaml"

    config_path = Path(config_path)

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)

            logging.config.dictConfig(config)

            logger = logging.getLogger(__name__)
            logger.info(f"Logging configured from: {config_path}")

        except Exception as e:
            _basic_config(default_level)
            logging.error(f"Error loading logging configuration: {e}")
            logging.warning("Using default logging configuration")
    else:
        _basic_config(default_level)
        logging.warning(f"Logging configuration file not found: {config_path}")
        logging.info("Using default logging configuration")
