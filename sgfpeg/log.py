import logging
import os
import sys

from .settings import LOGS_DIR

fmt = logging.Formatter('%(asctime)-15s %(levelname)s %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
logger = logging.getLogger('sgfpeg')
logger.addHandler(logging.NullHandler())


def setup_logging(level='INFO', log_file=None):
    """Send log records to stdout at [level], and everything to LOGS_DIR/[log_file] if given."""
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.DEBUG)

    log_stream = logging.StreamHandler(sys.stdout)
    log_stream.setLevel(level.upper() if isinstance(level, str) else level)
    log_stream.setFormatter(fmt)
    logger.addHandler(log_stream)

    if log_file:
        os.makedirs(LOGS_DIR, exist_ok=True)
        log_file_handler = logging.FileHandler(os.path.join(LOGS_DIR, log_file), encoding='utf-8')
        log_file_handler.setLevel(logging.DEBUG)
        log_file_handler.setFormatter(fmt)
        logger.addHandler(log_file_handler)

    return log_stream
