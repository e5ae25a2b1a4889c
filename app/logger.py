"""
Custom logging configuration for the task management backend.
Provides compact, readable console logs tagged with the component
(auth, users, teams, tasks, database) that emitted them.
"""
import logging
import sys
import time
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Optional


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for terminal formatting."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    WHITE = "\033[37m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_CYAN = "\033[96m"


# Component icons, keyed by the last segment of the logger name
COMPONENT_ICONS = {
    "authenticator": "🔑",
    "jwt_handler": "🎫",
    "identity": "🪪",
    "permissions": "🛡️",
    "users": "👤",
    "teams": "👥",
    "tasks": "📋",
    "seed": "🌱",
    "session": "🗄️",
    "main": "🚀",
    "default": "▶️",
}


class ApiFormatter(logging.Formatter):
    """
    Formatter that renders `HH:MM:SS | LEVEL | icon component | message`.
    Colors are only used when writing to a TTY.
    """

    LEVEL_FORMATS = {
        logging.DEBUG: (Colors.DIM, "DEBUG"),
        logging.INFO: (Colors.BRIGHT_CYAN, "INFO "),
        logging.WARNING: (Colors.BRIGHT_YELLOW, "WARN "),
        logging.ERROR: (Colors.BRIGHT_RED, "ERROR"),
        logging.CRITICAL: (Colors.BOLD + Colors.BRIGHT_RED, "CRIT "),
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color, level_text = self.LEVEL_FORMATS.get(
            record.levelno,
            (Colors.WHITE, record.levelname[:5])
        )

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        component = record.name.split(".")[-1] if record.name else "root"
        icon = COMPONENT_ICONS.get(component, COMPONENT_ICONS["default"])

        if self.use_colors:
            level_str = f"{color}{level_text}{Colors.RESET}"
            time_str = f"{Colors.DIM}{timestamp}{Colors.RESET}"
            component_str = f"{Colors.BRIGHT_BLUE}{component:14}{Colors.RESET}"
            formatted = f"{time_str} │ {level_str} │ {icon} {component_str} │ {record.getMessage()}"
        else:
            formatted = f"{timestamp} | {level_text} | {icon} {component:14} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_colors: bool = True
) -> None:
    """
    Configure logging for the backend.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        use_colors: Whether to use ANSI colors in console output
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ApiFormatter(use_colors=use_colors))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(ApiFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_operation(operation: Optional[str] = None):
    """
    Decorator that logs start, completion and duration of a write operation.

    Usage:
        @log_operation("tasks.create")
        def create(self, payload, current_user):
            ...
    """
    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__
        op_logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            op_logger.debug(f"▶ {name}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                op_logger.info(f"✗ {name} rejected ({type(e).__name__}) in {duration_ms:.0f}ms")
                raise
            duration_ms = (time.perf_counter() - start_time) * 1000
            op_logger.info(f"✓ {name} completed in {duration_ms:.0f}ms")
            return result

        return wrapper
    return decorator
