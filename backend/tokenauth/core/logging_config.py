import logging


def setup_logging(level: str = "INFO"):
    """
    Configures the root logger once for the whole service.
    Module loggers are obtained with logging.getLogger(__name__).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
