"""
Centralized logging configuration for the Hearing Test API.
Provides component-specific loggers with optional separate log files.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from ..config import get_config


DETAILED_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s'
)
SIMPLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ComponentLogger:
    """Manages component-specific logging."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None
    _unified_handler: Optional[logging.Handler] = None

    COMPONENTS = {
        'api': {'level': logging.INFO, 'file': 'api.log'},
        'auth': {'level': logging.INFO, 'file': 'auth.log'},
        'store': {'level': logging.INFO, 'file': 'store.log'},
        'main': {'level': logging.INFO, 'file': 'main.log'},
        'error': {'level': logging.ERROR, 'file': 'errors.log'},
    }

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None, debug: bool = False) -> None:
        """
        Initialize the logging system with component-specific loggers.

        Args:
            log_dir: Directory for log files. Defaults to config.app.log_dir
            debug: Enable debug logging for all components
        """
        if cls._initialized:
            return

        config = get_config()
        debug = debug or config.server.debug
        configured_level = logging.getLevelName(config.app.log_level)
        if not isinstance(configured_level, int):
            configured_level = logging.INFO

        if config.app.log_to_file:
            cls._log_dir = Path(log_dir or config.app.log_dir)
            cls._log_dir.mkdir(parents=True, exist_ok=True)

            cls._unified_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / 'unified.log',
                maxBytes=20 * 1024 * 1024,  # 20MB
                backupCount=3,
                encoding='utf-8'
            )
            cls._unified_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        for component_name, component_config in cls.COMPONENTS.items():
            level = logging.DEBUG if debug else max(component_config['level'], configured_level)
            cls._build_logger(component_name, level, component_config['file'])

        cls._initialized = True

        main_logger = cls._loggers['main']
        main_logger.info("Hearing Test API logging initialized")
        if cls._log_dir:
            main_logger.info(f"Log directory: {cls._log_dir}")

    @classmethod
    def _build_logger(cls, component: str, level: int, file_name: str) -> logging.Logger:
        logger = logging.getLogger(f"hearing.{component}")
        logger.handlers.clear()
        logger.propagate = False
        logger.setLevel(level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(console_handler)

        if cls._log_dir is not None:
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / file_name,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            logger.addHandler(file_handler)

        if cls._unified_handler is not None:
            logger.addHandler(cls._unified_handler)

        cls._loggers[component] = logger
        return logger

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            component: Component name (api, auth, store, main, error).
                       Unknown names get a logger created on demand.
        """
        if not cls._initialized:
            cls.initialize()

        logger = cls._loggers.get(component)
        if logger is None:
            level = cls._loggers['main'].level
            logger = cls._build_logger(component, level, f'{component}.log')
        return logger

    @classmethod
    def log_exception(cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an exception with context to both component and error logs.

        Args:
            component: Component where the exception occurred
            exc: The exception to log
            context: Additional context information
        """
        component_logger = cls.get_logger(component)
        error_logger = cls.get_logger('error')

        context_str = ""
        if context:
            context_str = " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())

        exc_info = (type(exc), exc, exc.__traceback__)
        component_logger.error(f"Exception in {component}: {type(exc).__name__}: {exc}{context_str}", exc_info=exc_info)
        error_logger.error(f"[{component}] {type(exc).__name__}: {exc}{context_str}", exc_info=exc_info)

    @classmethod
    def get_log_directory(cls) -> Optional[Path]:
        """Get the current log directory path."""
        return cls._log_dir

    @classmethod
    def reset(cls) -> None:
        """Close handlers and forget all component loggers."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                if handler is not cls._unified_handler:
                    handler.close()
        if cls._unified_handler is not None:
            cls._unified_handler.close()
        cls._loggers = {}
        cls._unified_handler = None
        cls._log_dir = None
        cls._initialized = False


# Convenience functions
def get_logger(component: str) -> logging.Logger:
    """Get a logger for a specific component."""
    return ComponentLogger.get_logger(component)


def initialize_logging(log_dir: Optional[str] = None, debug: bool = False) -> None:
    """Initialize the logging system."""
    ComponentLogger.initialize(log_dir=log_dir, debug=debug)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context."""
    ComponentLogger.log_exception(component, exc, context)
