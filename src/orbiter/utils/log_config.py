"""Package-wide logger, routed to stdout when first imported."""

import logging
import sys

from orbiter.utils.config import LOG_LEVEL


def setup_logging(level=LOG_LEVEL, format_string='%(asctime)s - %(name)s - %(levelname)s - %(message)s'):
    """Send log records of *level* and above to stdout."""
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stdout,
    )


setup_logging()

# Every module logs through this one named logger
logger = logging.getLogger("orbiter")
