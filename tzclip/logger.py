import os
import logging
from datetime import datetime

PACKAGE_LOGGER = 'tzclip'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_data_dir():
    """Directory the log file is written to"""
    data_dir = os.getenv('TZCLIP_DATA_DIR')
    if not data_dir:
        data_dir = os.path.dirname(os.path.abspath(__file__))
    os.makedirs(data_dir, exist_ok=True)
    return data_dir


def setup_logger(name, testing=False):
    """Get the logger for a tzclip module.

    Module loggers hang off the package logger. Testing mode gives the
    package logger one tzclip.log file handler; otherwise nothing is
    installed and the application decides where records go.
    """
    logger = logging.getLogger(name)
    if not testing:
        return logger

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    log_file = os.path.join(get_data_dir(), 'tzclip.log')
    if any(isinstance(h, logging.FileHandler) and h.baseFilename == log_file
           for h in package_logger.handlers):
        return logger

    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)

    package_logger.info('=' * 50)
    package_logger.info(f'Logging started at {datetime.now()}')
    package_logger.info('=' * 50)
    return logger
