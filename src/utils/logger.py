# src/utils/logger.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from src.utils import settings


def setup_logging(
    name: Optional[str] = None,
    log_level: Union[int, str, None] = None,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Gắn console handler + RotatingFileHandler vào logger `name` (mặc định root).

    Chỉ gọi ở entry point (streamlit app); các module thư viện chỉ dùng
    logging.getLogger(__name__).
    """
    logger = logging.getLogger(name)
    level = log_level if log_level is not None else settings.LOG_LEVEL
    logger.setLevel(level)

    # Streamlit rerun script nhiều lần -> không gắn handler trùng
    if logger.hasHandlers() and any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    console_format = logging.Formatter("%(message)s")
    file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    target_dir = Path(log_dir) if log_dir else settings.LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        target_dir / "app.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    return logger
