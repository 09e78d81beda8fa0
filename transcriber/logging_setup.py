"""
Logging configuration for the Flask app logger
"""
import json
import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextFormatter(logging.Formatter):
    """Appends the record's ``context`` dict as indented JSON"""

    def format(self, record):
        msg = super().format(record)
        context = getattr(record, "context", None)
        if context:
            msg += "\n" + json.dumps(context, indent=2, default=str)
        return msg


def configure_logging(app):
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "DEBUG")).upper())
    if not isinstance(level, int):
        level = logging.DEBUG

    formatter = ContextFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    logger = app.logger
    logger.setLevel(level)

    # Replace Flask's default handler so every line uses one format
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    log_dir = (app.config.get("LOG_DIR") or "").strip()
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        error_file = logging.FileHandler(os.path.join(log_dir, "error.log"))
        error_file.setLevel(logging.ERROR)
        error_file.setFormatter(formatter)
        logger.addHandler(error_file)

        combined_file = logging.FileHandler(os.path.join(log_dir, "combined.log"))
        combined_file.setLevel(level)
        combined_file.setFormatter(formatter)
        logger.addHandler(combined_file)

    return logger
