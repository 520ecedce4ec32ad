"""
Directory tree expansion

Each storage tree names a local directory (under the files directory)
and a destination root. Regular files become file entries with embedded
contents and symlinks become link entries, merged with any entries the
document already declares. Problems with one entry are reported against
the tree declaration and the walk moves on.
"""

import os
import posixpath
import stat
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ..core.options import TranslateOptions
from ..core.path import ContextPath
from ..core.report import Report
from ..core.translation import TranslationSet
from ..exceptions.errors import (
    ErrFileType,
    ErrNodeExists,
    ErrNoFilesDir,
    ErrTreeNotDirectory,
    PathTraversalError,
)
from ..schema import destination as dst
from ..schema import source as src
from ..utils.files import ensure_path_within_files_dir
from ..utils.logging import get_logger
from .node_tracker import NodeTracker
from .resource import DEST_TAG, SOURCE_TAG, embed

logger = get_logger(__name__)

DEFAULT_FILE_MODE = 0o644
DEFAULT_EXEC_MODE = 0o755


def process_trees(
    config: src.Config, ret: dst.Config, options: TranslateOptions
) -> Tuple[TranslationSet, Report]:
    """
    Expand every storage tree into ret, in declaration order

    Args:
        config: Source document
        ret: Destination document, modified in place
        options: Translate options

    Returns:
        (TranslationSet, Report) with absolute paths
    """
    ts = TranslationSet(SOURCE_TAG, DEST_TAG)
    r = Report()
    trees = config.storage.trees or []
    if not trees:
        return ts, r

    tracker = NodeTracker(ret.storage)
    for i, tree in enumerate(trees):
        tree_path = ContextPath.new(SOURCE_TAG, "storage", "trees", i)
        if not options.files_dir:
            r.add_on_fatal(tree_path, ErrNoFilesDir)
            return ts, r
        tree_ts, tree_r = expand_tree(tree_path, tree, tracker, options)
        ts.update(tree_ts)
        r.merge(tree_r)
    return ts, r


def expand_tree(
    tree_path: ContextPath,
    tree: src.Tree,
    tracker: NodeTracker,
    options: TranslateOptions,
) -> Tuple[TranslationSet, Report]:
    """
    Expand one tree declaration through the node tracker

    Args:
        tree_path: Source path of the tree declaration
        tree: Tree declaration
        tracker: Node tracker over the destination storage section
        options: Translate options; files_dir must be set

    Returns:
        (TranslationSet, Report)
    """
    ts = TranslationSet(SOURCE_TAG, DEST_TAG)
    r = Report()

    try:
        src_base = ensure_path_within_files_dir(tree.local, options.files_dir)
    except PathTraversalError as e:
        r.add_on_error(tree_path, e)
        return ts, r
    try:
        info = src_base.stat()
    except OSError as e:
        r.add_on_error(tree_path, e)
        return ts, r
    if not stat.S_ISDIR(info.st_mode):
        r.add_on_error(tree_path, ErrTreeNotDirectory)
        return ts, r

    dest_base = tree.path or "/"
    logger.debug("expanding tree", local=tree.local, path=dest_base)

    for src_path, entry_info, err in _walk(src_base):
        if err is not None:
            r.add_on_error(tree_path, err)
            continue
        rel = src_path.relative_to(src_base).as_posix()
        dest_path = posixpath.join(dest_base, rel)

        if stat.S_ISREG(entry_info.st_mode):
            _add_file(tree_path, src_path, dest_path, entry_info, tracker, ts, r, options)
        elif stat.S_ISLNK(entry_info.st_mode):
            _add_link(tree_path, src_path, dest_path, tracker, ts, r)
        else:
            r.add_on_error(tree_path, ErrFileType)
    return ts, r


def _walk(root: Path) -> Iterator[Tuple[Path, Optional[os.stat_result], Optional[OSError]]]:
    """
    Depth-first walk below root in sorted name order

    Directories are descended into but not yielded; symlinks are yielded
    and never followed. Errors are yielded in place of an entry.
    """
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        yield root, None, e
        return
    for child in children:
        try:
            info = child.lstat()
        except OSError as e:
            yield child, None, e
            continue
        if stat.S_ISDIR(info.st_mode):
            yield from _walk(child)
        else:
            yield child, info, None


def _add_file(
    tree_path: ContextPath,
    src_path: Path,
    dest_path: str,
    info: os.stat_result,
    tracker: NodeTracker,
    ts: TranslationSet,
    r: Report,
    options: TranslateOptions,
) -> None:
    i, file = tracker.get_file(dest_path)
    if file is not None:
        if file.contents is not None and file.contents.source:
            logger.debug("duplicate tree file", path=dest_path)
            r.add_on_error(tree_path, ErrNodeExists)
            return
    else:
        if tracker.exists(dest_path):
            r.add_on_error(tree_path, ErrNodeExists)
            return
        i, file = tracker.add_file(dst.File(path=dest_path))
        ts.add_from_common_source(
            tree_path, ContextPath.new(DEST_TAG, "storage", "files", i), file
        )

    try:
        contents = src_path.read_bytes()
    except OSError as e:
        r.add_on_error(tree_path, e)
        return

    if file.contents is None:
        file.contents = dst.Resource()
    file_path = ContextPath.new(DEST_TAG, "storage", "files", i)
    url, gzipped = embed(contents, file.contents.compression, options)
    file.contents.source = url
    ts.add_translation(tree_path, file_path.append("contents", "source"))
    if gzipped:
        file.contents.compression = "gzip"
        ts.add_translation(tree_path, file_path.append("contents", "compression"))
    if file.mode is None:
        file.mode = DEFAULT_EXEC_MODE if info.st_mode & 0o111 else DEFAULT_FILE_MODE
        ts.add_translation(tree_path, file_path.append("mode"))


def _add_link(
    tree_path: ContextPath,
    src_path: Path,
    dest_path: str,
    tracker: NodeTracker,
    ts: TranslationSet,
    r: Report,
) -> None:
    i, link = tracker.get_link(dest_path)
    if link is not None:
        if link.target:
            r.add_on_error(tree_path, ErrNodeExists)
            return
    else:
        if tracker.exists(dest_path):
            r.add_on_error(tree_path, ErrNodeExists)
            return
        i, link = tracker.add_link(dst.Link(path=dest_path))
        ts.add_from_common_source(
            tree_path, ContextPath.new(DEST_TAG, "storage", "links", i), link
        )

    try:
        link.target = os.readlink(src_path)
    except OSError as e:
        r.add_on_error(tree_path, e)
        return
    ts.add_translation(
        tree_path, ContextPath.new(DEST_TAG, "storage", "links", i, "target")
    )
