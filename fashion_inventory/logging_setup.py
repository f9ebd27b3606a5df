import logging
import logging.handlers
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from fashion_inventory.config import config

PACKAGE_LOGGER = 'fashion_inventory'

class Logger:
    """Logging manager for the Fashion Inventory System.

    Handlers live on the ``fashion_inventory`` logger only. Modules log through
    ``logging.getLogger(__name__)`` and reach the shared rotating log file and
    console stream by propagation.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Configure the package logger if not already done."""
        if self._initialized:
            return

        self._log_config = config.log_config
        self._log_dir = Path(self._log_config['directory'])
        self._log_dir.mkdir(parents=True, exist_ok=True)

        self._package_logger = self._configure_package_logger()
        self._initialized = True

    def _configure_package_logger(self):
        settings = self._log_config
        formatter = logging.Formatter(settings['format'])

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(getattr(logging, settings['level'].upper(), logging.INFO))

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
            handler.close()

        file_handler = logging.handlers.RotatingFileHandler(
            self._log_dir / f"{PACKAGE_LOGGER}.log",
            maxBytes=settings['max_size_mb'] * 1024 * 1024,
            backupCount=settings['backup_count'],
            delay=True
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

        if settings['console_output']:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            package_logger.addHandler(console_handler)

        package_logger.propagate = False
        return package_logger

    @property
    def log_file(self):
        return self._log_dir / f"{PACKAGE_LOGGER}.log"

    def get_logger(self, name):
        """Get a logger inside the package hierarchy.

        Args:
            name: Short name ('cli') or dotted module name

        Returns:
            Logger that propagates to the package handlers
        """
        if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.'):
            return logging.getLogger(name)
        return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")

    def log_exception(self, log, exception, message=None):
        """Log an inventory error together with its details and traceback.

        Args:
            log: Logger to write to
            exception: Exception being handled
            message: Optional context prefix
        """
        text = f"{message}: {exception}" if message else str(exception)
        details = getattr(exception, 'details', None)
        if details:
            text = f"{text} {details}"
        log.error(text, exc_info=exception)

    @contextmanager
    def command_log(self, command, log=None):
        """Log the start, outcome and duration of a CLI command."""
        log = log or self.get_logger('cli')
        started = datetime.now()
        log.info(f"Starting command: {command}")
        try:
            yield
        except Exception:
            log.error(f"Failed command: {command} after {datetime.now() - started}")
            raise
        log.info(f"Completed command: {command} in {datetime.now() - started}")

# Global logger instance
logger = Logger()

def get_logger(name):
    """Get a logger inside the package hierarchy."""
    return logger.get_logger(name)
