"""Helpers shared by the translation passes"""

from .dataurl import decode_data_url, make_data_url
from .files import ensure_path_within_files_dir
from .logging import configure_logging, get_logger
from .systemd import mount_unit_name, unit_name_path_escape

__all__ = [
    "decode_data_url",
    "make_data_url",
    "ensure_path_within_files_dir",
    "configure_logging",
    "get_logger",
    "mount_unit_name",
    "unit_name_path_escape",
]
