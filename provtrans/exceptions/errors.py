"""
provtrans exception definitions

Error types raised by the translator, plus the sentinel errors that are
attached to diagnostics while a translation run is in progress.
"""

from typing import Any, Dict, Optional


class ProvtransError(Exception):
    """provtrans base exception"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TranslationError(ProvtransError):
    """
    Translation contract error

    Raised by the translation engine when a source record cannot be mapped
    structurally onto its destination record, such as a field with no
    counterpart or a scalar of the wrong type. These indicate a schema
    mapping bug rather than a problem with the document being translated.
    """

    pass


class PathTraversalError(ProvtransError):
    """
    Local path escapes the files directory

    Raised before any read when a resource or tree path resolves outside
    the configured base directory.
    """

    pass


class TemplateRenderError(ProvtransError):
    """
    Unit template rendering error

    Not expected for filesystems that passed upstream validation.
    """

    pass


class DataURLError(ProvtransError):
    """Malformed data URL"""

    pass


class UsageError(ProvtransError):
    """
    Invalid command line input

    Occurs when the input document cannot be read, is not valid YAML, or
    declares a version this translator does not handle.
    """

    pass


class DiagnosticError(ProvtransError):
    """Error recorded as a diagnostic rather than raised"""

    pass


ErrNoFilesDir = DiagnosticError("local file paths are relative to a files directory that must be specified")
ErrTreeNotDirectory = DiagnosticError("root of tree must be a directory")
ErrNodeExists = DiagnosticError("matching filesystem node has existing contents or different type")
ErrFileType = DiagnosticError("trees may only contain files, directories, and symlinks")
