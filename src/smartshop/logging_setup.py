import logging
import os
from typing import Optional

from smartshop.settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Minimal logging setup.
    - Uses the explicit level, then LOG_LEVEL env, then APP_LOG_LEVEL from settings.
    - Configures a single console handler via logging.basicConfig.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or get_settings().log_level).upper()
    # Fallback to INFO if user passes something weird
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # urllib3 retry chatter is only useful when debugging the transport
    if level_value > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
