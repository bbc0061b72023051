import logging
import sys

PACKAGE_LOGGER = "songsheet"

_FORMATS = {
    logging.DEBUG: "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)",
}
_DEFAULT_FORMAT = "%(levelname)s: %(message)s"


def setup_logger(level=logging.INFO):
    """Send the package's log records to stderr at *level*.

    Only the ``songsheet`` logger is configured; the root logger and other
    libraries' loggers are left alone.  Calling this again replaces the
    handler it installed earlier.  Debug output includes the logger name and
    source location.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_songsheet", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler._songsheet = True
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMATS.get(level, _DEFAULT_FORMAT)))

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
