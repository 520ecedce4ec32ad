"""
Translation engine

Maps a source record onto a destination record field by field. Each
source field is copied to the destination field of the same name unless
the translator declares a rename or explicitly ignores it. Records and
sequences are translated recursively; values whose type has a registered
custom translator are handed to it instead, at any depth.

Every translation returns (value, TranslationSet, Report) with paths
relative to the translated value. Callers re-root the results with
prefixed() and merge them, so no path state is shared between calls.
"""

import types
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    List,
    Optional,
    Set,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel

from ..exceptions.errors import TranslationError
from ..utils.logging import get_logger
from .options import TranslateOptions
from .path import ContextPath
from .report import Report
from .translation import TranslationKind, TranslationSet

logger = get_logger(__name__)

CustomTranslator = Callable[[Any, TranslateOptions], Tuple[Any, TranslationSet, Report]]

_SCALAR = "scalar"
_MODEL = "model"
_LIST = "list"


def unwrap_annotation(annotation: Any) -> Tuple[str, Any]:
    """
    Classify a field annotation

    Optional wrappers are stripped; the result names the shape of the
    underlying type.

    Args:
        annotation: Field annotation, e.g. Optional[List[File]]

    Returns:
        (kind, inner) where kind is "scalar", "model" or "list"; for lists
        inner is the element annotation

    Raises:
        TranslationError: Unions of several non-None types
    """
    origin = get_origin(annotation)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) != 1:
            raise TranslationError(f"Unsupported union annotation: {annotation}")
        return unwrap_annotation(args[0])
    if origin in (list, List):
        (inner,) = get_args(annotation) or (Any,)
        return _LIST, inner
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return _MODEL, annotation
    return _SCALAR, annotation


def field_key(model: Type[BaseModel], name: str) -> str:
    """Key a field is written under in its document (its alias, if any)"""
    field = model.model_fields[name]
    return field.alias or name


class Translator:
    """
    Type-directed structural translator

    Attributes:
        from_tag: Format tag of source paths
        to_tag: Format tag of destination paths
        options: Options handed to custom translators
    """

    def __init__(self, from_tag: str, to_tag: str, options: Optional[TranslateOptions] = None):
        self.from_tag = from_tag
        self.to_tag = to_tag
        self.options = options or TranslateOptions()
        self._custom: Dict[type, CustomTranslator] = {}
        self._renames: Dict[type, Dict[str, str]] = {}
        self._ignored: Dict[type, Set[str]] = {}

    def add_custom_translator(self, from_type: type, fn: CustomTranslator) -> None:
        """
        Register a custom translator for every occurrence of from_type

        fn(value, options) must return (destination value, TranslationSet,
        Report) with paths relative to the value.
        """
        self._custom[from_type] = fn

    def add_rename(self, from_type: Type[BaseModel], from_field: str, to_field: str) -> None:
        """Map from_type.from_field onto a differently named destination field"""
        self._renames.setdefault(from_type, {})[from_field] = to_field

    def ignore(self, from_type: Type[BaseModel], *fields: str) -> None:
        """Exclude fields of from_type from structural translation"""
        self._ignored.setdefault(from_type, set()).update(fields)

    def ignored(self, from_type: Type[BaseModel]) -> FrozenSet[str]:
        return frozenset(self._ignored.get(from_type, ()))

    def field_mapping(
        self, from_type: Type[BaseModel], to_type: Type[BaseModel]
    ) -> List[Tuple[str, str]]:
        """
        Pair each translated source field with its destination field

        Raises:
            TranslationError: A source field is neither mapped nor ignored
        """
        renames = self._renames.get(from_type, {})
        ignored = self._ignored.get(from_type, set())
        pairs = []
        for name in from_type.model_fields:
            if name in ignored:
                continue
            to_name = renames.get(name, name)
            if to_name not in to_type.model_fields:
                raise TranslationError(
                    f"{from_type.__name__}.{name} has no counterpart in {to_type.__name__}",
                    {"from_type": from_type.__name__, "field": name},
                )
            pairs.append((name, to_name))
        return pairs

    def translate(self, value: Any, to_type: Any) -> Tuple[Any, TranslationSet, Report]:
        """
        Translate value into to_type

        Args:
            value: Source value (record, list or scalar)
            to_type: Destination annotation

        Returns:
            (destination value, TranslationSet, Report), paths relative to value
        """
        fn = self._custom.get(type(value))
        if fn is not None:
            logger.debug("custom translator", from_type=type(value).__name__)
            to, ts, r = fn(value, self.options)
            ts = self._checked(ts)
            root_from = ContextPath.new(self.from_tag)
            root_to = ContextPath.new(self.to_tag)
            if root_to not in ts:
                ts.add_translation(root_from, root_to)
            return to, ts, r

        kind, inner = unwrap_annotation(to_type)
        if kind == _MODEL:
            if not isinstance(value, BaseModel):
                raise TranslationError(
                    f"Cannot translate {type(value).__name__} into record {inner.__name__}"
                )
            return self.translate_fields(value, inner)
        if kind == _LIST:
            if not isinstance(value, list):
                raise TranslationError(
                    f"Cannot translate {type(value).__name__} into a sequence"
                )
            return self._translate_list(value, inner)
        return self._translate_scalar(value, inner)

    def translate_fields(
        self, value: BaseModel, to_type: Type[BaseModel]
    ) -> Tuple[BaseModel, TranslationSet, Report]:
        """
        Structurally translate a record, bypassing any custom translator for
        its own type (nested values still dispatch to custom translators)
        """
        from_type = type(value)
        ts = TranslationSet(self.from_tag, self.to_tag)
        r = Report()
        values: Dict[str, Any] = {}

        for from_name, to_name in self.field_mapping(from_type, to_type):
            child = getattr(value, from_name)
            if child is None:
                continue
            to_annotation = to_type.model_fields[to_name].annotation
            to_value, sub_ts, sub_r = self.translate(child, to_annotation)
            values[to_name] = to_value

            from_key = field_key(from_type, from_name)
            to_key = field_key(to_type, to_name)
            r.merge(ts.merge(sub_ts.prefixed((from_key,), (to_key,))))
            r.merge(sub_r.prefixed(from_key))

        ts.add_translation(ContextPath.new(self.from_tag), ContextPath.new(self.to_tag))
        return to_type(**values), ts, r

    def _translate_list(self, value: list, inner: Any) -> Tuple[list, TranslationSet, Report]:
        ts = TranslationSet(self.from_tag, self.to_tag)
        r = Report()
        result = []
        for i, item in enumerate(value):
            to_item, sub_ts, sub_r = self.translate(item, inner)
            result.append(to_item)
            r.merge(ts.merge(sub_ts.prefixed((i,), (i,))))
            r.merge(sub_r.prefixed(i))
        ts.add_translation(ContextPath.new(self.from_tag), ContextPath.new(self.to_tag))
        return result, ts, r

    def _translate_scalar(self, value: Any, inner: Any) -> Tuple[Any, TranslationSet, Report]:
        if isinstance(value, (BaseModel, list)):
            raise TranslationError(f"Cannot translate {type(value).__name__} into a scalar")
        if inner is not Any and isinstance(inner, type) and not isinstance(value, inner):
            raise TranslationError(
                f"Cannot copy {type(value).__name__} into {inner.__name__}"
            )
        ts = TranslationSet(self.from_tag, self.to_tag)
        ts.add_translation(
            ContextPath.new(self.from_tag),
            ContextPath.new(self.to_tag),
            TranslationKind.IDENTITY,
        )
        return value, ts, Report()

    def _checked(self, ts: TranslationSet) -> TranslationSet:
        if ts.from_tag != self.from_tag or ts.to_tag != self.to_tag:
            raise TranslationError(
                f"custom translator returned {ts.from_tag}->{ts.to_tag} translations, "
                f"expected {self.from_tag}->{self.to_tag}"
            )
        return ts


def check_field_coverage(
    translator: Translator, from_type: Type[BaseModel], to_type: Type[BaseModel]
) -> List[str]:
    """
    Verify that every record pair reachable from (from_type, to_type) maps

    Each source field must either be ignored or have a destination field of
    the same shape; scalar types must match. Records with a custom translator
    are checked too, since custom translators delegate most of their fields
    to structural translation.

    Args:
        translator: Configured translator (renames, ignores)
        from_type: Root source record
        to_type: Root destination record

    Returns:
        List of problems, empty when the schemas correspond fully
    """
    problems: List[str] = []
    seen: Set[Tuple[type, type]] = set()

    def walk(src: Type[BaseModel], dst: Type[BaseModel]) -> None:
        if (src, dst) in seen:
            return
        seen.add((src, dst))
        try:
            pairs = translator.field_mapping(src, dst)
        except TranslationError as e:
            problems.append(e.message)
            return
        for from_name, to_name in pairs:
            label = f"{src.__name__}.{from_name}"
            check(
                label,
                src.model_fields[from_name].annotation,
                dst.model_fields[to_name].annotation,
            )

    def check(label: str, src_ann: Any, dst_ann: Any) -> None:
        src_kind, src_inner = unwrap_annotation(src_ann)
        dst_kind, dst_inner = unwrap_annotation(dst_ann)
        if src_kind != dst_kind:
            problems.append(f"{label}: {src_kind} cannot map onto {dst_kind}")
        elif src_kind == _MODEL:
            walk(src_inner, dst_inner)
        elif src_kind == _LIST:
            check(f"{label}[]", src_inner, dst_inner)
        elif src_inner != dst_inner:
            problems.append(f"{label}: type {src_inner} differs from {dst_inner}")

    walk(from_type, to_type)
    return problems
