import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """Configure root logging once for the service process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # passlib logs a noisy trapped warning when reading newer bcrypt versions
    logging.getLogger("passlib").setLevel(logging.ERROR)
