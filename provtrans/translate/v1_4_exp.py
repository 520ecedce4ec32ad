"""
Translation from source config 1.4.0-experimental to spec 3.3.0-experimental

Runs structural translation with the version's custom translators, then
expands storage trees, then synthesizes mount units. Each phase is
checked for fatal diagnostics before the next one runs.
"""

from typing import Tuple

from ..core.options import TranslateOptions
from ..core.report import Report
from ..core.translation import TranslationSet
from ..core.translator import Translator
from ..schema import destination as dst
from ..schema import source as src
from ..utils.logging import get_logger
from .mount_units import add_mount_units
from .resource import DEST_TAG, SOURCE_TAG, translate_resource
from .trees import process_trees

logger = get_logger(__name__)


def new_translator(options: TranslateOptions) -> Translator:
    """
    Translator configured for this version pair

    Fields ignored here are consumed by version selection (version,
    variant) or by the post-passes (trees, with_mount_unit) and the
    resource translator (local, inline).
    """
    tr = Translator(SOURCE_TAG, DEST_TAG, options)
    tr.add_custom_translator(src.Ignition, translate_ignition)
    tr.add_custom_translator(src.Resource, translate_resource)
    tr.ignore(src.Config, "version", "variant")
    tr.ignore(src.Storage, "trees")
    tr.ignore(src.Filesystem, "with_mount_unit")
    tr.ignore(src.Resource, "local", "inline")
    return tr


def translate_ignition(
    from_: src.Ignition, options: TranslateOptions
) -> Tuple[dst.Ignition, TranslationSet, Report]:
    """Custom translator for the ignition section; stamps the spec version"""
    tr = Translator(SOURCE_TAG, DEST_TAG, options)
    tr.add_custom_translator(src.Resource, translate_resource)
    to, ts, r = tr.translate_fields(from_, dst.Ignition)
    to.version = dst.MAX_VERSION
    return to, ts, r


def translate_config(
    config: src.Config, options: TranslateOptions
) -> Tuple[dst.Config, TranslationSet, Report]:
    """
    Translate a source document without validating input or output

    Args:
        config: Source document
        options: Translate options

    Returns:
        (destination config, TranslationSet, Report). When the report has
        errors the config and translation set are empty.
    """
    empty = (dst.Config(), TranslationSet(SOURCE_TAG, DEST_TAG))

    tr = new_translator(options)
    ret, ts, r = tr.translate(config, dst.Config)
    logger.debug("translated fields", translations=len(ts), diagnostics=len(r))
    if r.is_fatal():
        return empty + (r,)

    tree_ts, tree_r = process_trees(config, ret, options)
    ts.update(tree_ts)
    r.merge(tree_r)
    logger.debug("expanded trees", translations=len(tree_ts), diagnostics=len(tree_r))
    if r.is_fatal():
        return empty + (r,)

    unit_ts, unit_r = add_mount_units(config, ret)
    ts.update(unit_ts)
    r.merge(unit_r)
    logger.debug("synthesized mount units", translations=len(unit_ts), diagnostics=len(unit_r))

    if options.debug_print_translations:
        for t in ts:
            logger.debug("translation", edge=str(t))

    if r.has_errors():
        return empty + (r,)
    return ret, ts, r
