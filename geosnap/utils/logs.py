import logging

from geosnap.utils.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once from LOG_LEVEL (or an explicit level)."""
    name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO),
                        format=LOG_FORMAT)
