"""
Custom Logging Module
^^^^^^^^^^^^^^^^^^^^^
Provides a setup_logger function to configure the logger using logger.cfg.
"""
import configparser
import logging
import logging.config
import os
from typing import Optional

from .config import Config, EnvConfig


def setup_logger(name: str, config: Optional[Config] = None) -> logging.Logger:
    """
    Set up a logger with the provided name using the 'logger.cfg' file, at
    the level named by the configuration.
    """
    if config is None:
        config = EnvConfig()

    parser = configparser.ConfigParser()
    parser.read(
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "logger.cfg")
    )
    parser["logger_txcodec"]["level"] = config.log_level
    logging.config.fileConfig(parser, disable_existing_loggers=False)

    logger = logging.getLogger(name)

    return logger
