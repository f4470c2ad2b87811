import logging
import sys

def setup_logging():
    """
    Configure application logging.

    Everything goes to stdout with the level and logger name so the
    platform log collector can split request noise from service events.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # Reduce SQLAlchemy noise in logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("frontdesk")


# Create global logger instance
logger = setup_logging()
