"""Process-wide logging setup.

``setup_logging`` attaches a single console handler to the root logger.
Calling it again (tests, repeated ``create_app``) is a no-op.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Unknown level names fall back to ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
