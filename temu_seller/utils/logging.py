# temu_seller/utils/logging.py
import logging
import colorlog

LEVEL_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}

class SubsystemColorFilter(logging.Filter):
    """Colors records by the upstream sub-system prefix in the message."""
    def filter(self, record):
        message = str(record.msg)
        if "[kuajingmaihuo]" in message:
            record.log_color = "yellow"
        elif "[seller-central]" in message:
            record.log_color = "cyan"
        else:
            record.log_color = LEVEL_COLORS.get(record.levelname, 'white')
        return True

def setup_logging() -> logging.Logger:
    """Configure colored logging for the SDK.

    Returns:
        logging.Logger: Configured logger instance.
    """
    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        '%(log_color)s%(asctime)s - [ Temu ] %(name)s - %(levelname)s - %(message)s',
        log_colors=LEVEL_COLORS,
    ))
    handler.addFilter(SubsystemColorFilter())

    logger = logging.getLogger("temu_seller")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        logger.addHandler(handler)
    return logger

def set_debug(enabled: bool) -> None:
    """Switch the SDK logger to DEBUG so request and response bodies are logged."""
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)

logger = setup_logging()
