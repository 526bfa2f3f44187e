# ============================================================================
# FILE: catalog_api/core/logging.py
# ============================================================================
import logging
from catalog_api.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3", "multipart")


def setup_logging(level: str = None) -> None:
    """Configure root logging once for the whole application"""
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
