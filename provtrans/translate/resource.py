"""
Resource resolution

Turns local/inline resource shorthand into self-contained data URLs.
Local paths are confined to the files directory; the boundary check
happens before anything is read.
"""

from pathlib import Path
from typing import Optional, Tuple

from ..core.options import TranslateOptions
from ..core.path import ContextPath
from ..core.report import Report
from ..core.translation import TranslationSet
from ..core.translator import Translator
from ..exceptions.errors import ErrNoFilesDir, PathTraversalError
from ..schema import destination as dst
from ..schema import source as src
from ..utils.dataurl import make_data_url
from ..utils.files import ensure_path_within_files_dir
from ..utils.logging import get_logger

logger = get_logger(__name__)

SOURCE_TAG = "yaml"
DEST_TAG = "json"


def embed(
    contents: bytes, current_compression: Optional[str], options: TranslateOptions
) -> Tuple[str, bool]:
    """
    Encode contents under the run's compression policy

    Returns:
        (data URL, whether gzip compression was added)
    """
    return make_data_url(
        contents, current_compression, not options.no_resource_auto_compression
    )


def resolve_resource(
    resource: src.Resource, options: TranslateOptions
) -> Tuple[Optional[str], bool, Report]:
    """
    Resolve a resource declaration into its destination source URL

    Args:
        resource: Source resource declaration
        options: Translate options (files_dir, compression policy)

    Returns:
        (source URL, compressed, Report). With neither local nor inline
        set, the declared source passes through uncompressed. Report paths
        are relative to the resource.
    """
    r = Report()

    if resource.local is not None:
        c = ContextPath.new(SOURCE_TAG, "local")
        if not options.files_dir:
            r.add_on_fatal(c, ErrNoFilesDir)
            return resource.source, False, r
        try:
            file_path = ensure_path_within_files_dir(resource.local, options.files_dir)
        except PathTraversalError as e:
            r.add_on_error(c, e)
            return resource.source, False, r
        try:
            contents = Path(file_path).read_bytes()
        except OSError as e:
            r.add_on_error(c, e)
            return resource.source, False, r
        url, gzipped = embed(contents, resource.compression, options)
        logger.debug("embedded local resource", path=resource.local, gzipped=gzipped)
        return url, gzipped, r

    if resource.inline is not None:
        url, gzipped = embed(resource.inline.encode("utf-8"), resource.compression, options)
        return url, gzipped, r

    return resource.source, False, r


def translate_resource(
    from_: src.Resource, options: TranslateOptions
) -> Tuple[dst.Resource, TranslationSet, Report]:
    """Custom translator for Resource records"""
    tr = Translator(SOURCE_TAG, DEST_TAG, options)
    tr.ignore(src.Resource, "local", "inline")
    to, ts, r = tr.translate_fields(from_, dst.Resource)

    url, gzipped, rr = resolve_resource(from_, options)
    r.merge(rr)

    declared = None
    if from_.local is not None:
        declared = ContextPath.new(SOURCE_TAG, "local")
    elif from_.inline is not None:
        declared = ContextPath.new(SOURCE_TAG, "inline")

    if declared is None or rr.has_errors():
        return to, ts, r

    to.source = url
    ts.add_translation(declared, ContextPath.new(DEST_TAG, "source"))
    if gzipped:
        to.compression = "gzip"
        ts.add_translation(declared, ContextPath.new(DEST_TAG, "compression"))
    return to, ts, r
