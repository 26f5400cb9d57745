"""Root logger configuration for the API process."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.

    Does nothing if handlers are already attached (e.g. uvicorn or pytest
    configured logging first), so repeated app imports don't duplicate output.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
