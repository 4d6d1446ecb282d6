"""
Logging bootstrap.

Configures the root logger once with a shared format. The level comes from
the explicit ``level`` argument, else the ``LOG_LEVEL`` setting.
"""

import logging
from typing import Optional

from teamtrain.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    log_level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
