"""
Translate options

Options that influence a translation run. They can be built directly,
or from environment variables prefixed with PROVTRANS_.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ["true", "1", "yes"]


class TranslateOptions(BaseModel):
    """
    Options for one translation run

    Attributes:
        files_dir: Base directory for local resources and trees
        no_resource_auto_compression: Never gzip embedded contents
        debug_print_translations: Log every provenance edge at debug level
    """

    files_dir: Optional[str] = None
    no_resource_auto_compression: bool = False
    debug_print_translations: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TranslateOptions":
        """
        Load options from environment variables

        PROVTRANS_FILES_DIR sets files_dir and PROVTRANS_NO_AUTO_COMPRESSION
        (true/1/yes) disables auto-compression.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            TranslateOptions instance
        """
        env = os.environ if environ is None else environ
        values = {}

        env_mappings = {
            "PROVTRANS_FILES_DIR": ("files_dir", str),
            "PROVTRANS_NO_AUTO_COMPRESSION": ("no_resource_auto_compression", _parse_bool),
            "PROVTRANS_DEBUG_PRINT_TRANSLATIONS": ("debug_print_translations", _parse_bool),
        }
        for env_var, (field_name, converter) in env_mappings.items():
            raw = env.get(env_var)
            if raw is not None and raw != "":
                values[field_name] = converter(raw)

        return cls(**values)

    def with_overrides(self, **overrides) -> "TranslateOptions":
        """Return a copy with non-None overrides applied"""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=updates)
