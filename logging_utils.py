# logging_utils.py
import logging
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"

_CONFIGURED = False


def configure_root_logger(level: Union[int, str, None] = None):
    """
    Attach a single stream handler to the root logger. Later calls only adjust
    the level, so reruns (Streamlit re-executes the script) never stack handlers.
    """
    global _CONFIGURED
    root = logging.getLogger()
    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)
    if _CONFIGURED:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    if level is None:
        root.setLevel(logging.INFO)
    _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    configure_root_logger()
    return logging.getLogger(name)
