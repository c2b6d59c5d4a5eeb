import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

import colorama
from colorama import Fore, Style

from crossval.utils import constants

class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""
    COLORS = {
        'DEBUG': Fore.WHITE + Style.DIM,
        'INFO': Fore.CYAN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT
    }
    RESET = Style.RESET_ALL

    def format(self, record):
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)

class LoggingConfigurator:
    """Configures logging for the library's 'crossval' logger hierarchy."""

    def __init__(self, config: dict):
        self.config = config.get('logging', {})
        self.log_level = getattr(logging, self.config.get('level', 'INFO').upper())
        self.log_dir = Path(self.config.get('log_dir', constants.LOG_DIR))
        self.logger_name = 'crossval'

    def setup(self) -> logging.Logger:
        """Attach console and file handlers to the library logger."""
        logger = logging.getLogger(self.logger_name)
        logger.setLevel(self.log_level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        if self.config.get('log_to_console', True):
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.log_level)

            if self.config.get('colorful_console', True):
                colorama.just_fix_windows_console()
                formatter = ColoredFormatter(constants.LOG_FORMAT, datefmt=constants.LOG_DATE_FORMAT)
            else:
                formatter = logging.Formatter(constants.LOG_FORMAT, datefmt=constants.LOG_DATE_FORMAT)

            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # File Handler (always UTF-8)
        if self.config.get('log_to_file', False):
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._add_file_handler(logger, constants.LOG_FILE)

        return logger

    def _add_file_handler(self, logger: logging.Logger, filename: str):
        file_path = self.log_dir / filename
        handler = RotatingFileHandler(
            file_path,
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(constants.FILE_LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(f"{self.logger_name}.{name}")
