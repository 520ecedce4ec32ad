"""Local file helpers scoped to the files directory."""

import os
from pathlib import Path

from ..exceptions.errors import PathTraversalError


def ensure_path_within_files_dir(relative: str, files_dir: str) -> Path:
    """
    Resolve a declared local path against the files directory

    The declared path is joined onto files_dir the way a path join works
    on the command line (a leading "/" does not escape the base), then
    normalized and symlink-resolved. The result must lie strictly inside
    files_dir. No file is opened.

    Args:
        relative: Path as declared in the document
        files_dir: Configured base directory

    Returns:
        Resolved absolute path inside files_dir

    Raises:
        PathTraversalError: The resolved path is outside files_dir
    """
    root = Path(files_dir).resolve()
    candidate = Path(os.path.normpath(os.path.join(str(root), relative.lstrip("/"))))
    resolved = candidate.resolve(strict=False)

    if resolved == root or not resolved.is_relative_to(root):
        raise PathTraversalError(
            "local file path traverses outside the files directory",
            {"path": relative, "files_dir": str(root)},
        )
    return resolved
