import logging
import os

from src.config.settings import AppConfig, config as default_config

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(app_config: AppConfig = None) -> logging.Logger:
    """
    Configure the root logger from LOG_LEVEL / ENABLE_FILE_LOGGING.
    Safe to call more than once: handlers are only added the first time.
    """
    app_config = app_config or default_config
    root = logging.getLogger()
    root.setLevel(getattr(logging, app_config.LOG_LEVEL, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    log_path = os.path.abspath(app_config.LOG_FILE)
    if app_config.ENABLE_FILE_LOGGING and not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path for h in root.handlers):
        file_handler = logging.FileHandler(app_config.LOG_FILE)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
