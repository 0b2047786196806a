import logging, sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import get_settings

FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(FORMAT))
    root = logging.getLogger()
    root.setLevel(level if level is not None else get_settings().log_level.upper())
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)

@contextmanager
def open_log_sink(path: Union[str, Path], level: int = logging.INFO) -> Iterator[logging.Logger]:
    """
    Append-only file sink for one client (or several sharing it).

    The logger is built directly rather than through getLogger, so it is not
    kept by the logging manager and has no parent: the file only gets the
    client's own lines. The handler is closed on exit.
    """
    logger = logging.Logger("pokeapi_client.sink", level)
    logger.propagate = False
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(handler)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        handler.close()
