"""
Translation sets

A translation set records provenance: for each destination location, the
source location that produced it. Edges are keyed by destination path, so
each destination value has exactly one recorded origin.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel

from .path import ContextPath, Segment
from .report import Report


class TranslationKind(str, Enum):
    """Provenance edge kind"""

    VALUE = "value"
    IDENTITY = "identity"


@dataclass(frozen=True)
class Translation:
    """Provenance edge from a source path to a destination path"""

    from_path: ContextPath
    to_path: ContextPath
    kind: TranslationKind = TranslationKind.VALUE

    def __str__(self) -> str:
        return f"{self.from_path} -> {self.to_path} ({self.kind.value})"


class TranslationSet:
    """
    Collection of provenance edges between two document formats

    Attributes:
        from_tag: Format tag of source paths
        to_tag: Format tag of destination paths
    """

    def __init__(self, from_tag: str, to_tag: str):
        self.from_tag = from_tag
        self.to_tag = to_tag
        self._set: Dict[Tuple[Segment, ...], Translation] = {}

    def add_translation(
        self,
        from_path: ContextPath,
        to_path: ContextPath,
        kind: TranslationKind = TranslationKind.VALUE,
    ) -> None:
        """
        Record that to_path was produced from from_path

        A later edge for the same destination replaces the earlier one.
        """
        if from_path.tag != self.from_tag or to_path.tag != self.to_tag:
            raise ValueError(
                f"translation tags {from_path.tag}->{to_path.tag} do not match "
                f"set tags {self.from_tag}->{self.to_tag}"
            )
        self._set[to_path.path] = Translation(from_path, to_path, kind)

    def add_identity(self, *names: str) -> None:
        """Record unchanged copies of same-named top-level fields"""
        for name in names:
            self.add_translation(
                ContextPath.new(self.from_tag, name),
                ContextPath.new(self.to_tag, name),
                TranslationKind.IDENTITY,
            )

    def add_from_common_source(
        self, common: ContextPath, to_prefix: ContextPath, value: Any
    ) -> None:
        """
        Attribute every set location of value to a single source path

        Used for synthesized entries, where the whole destination record
        derives from one declaration.

        Args:
            common: Source path responsible for the value
            to_prefix: Destination path of value
            value: Destination value (record, list or scalar)
        """
        for to_path in _value_paths(value, to_prefix):
            self.add_translation(common, to_path)
        self.add_translation(common, to_prefix)

    def merge(self, other: "TranslationSet") -> Report:
        """
        Union other into this set

        Two edges for one destination path that name different sources are
        a contract violation; the incoming edge is dropped and an error is
        reported at its source path. A set records locations, not values, so
        differing sources stand in for differing values: two edges from the
        same source always carry the same value and never conflict.

        Returns:
            Report describing any conflicting edges
        """
        r = Report()
        for key, t in other._set.items():
            existing = self._set.get(key)
            if existing is not None and existing.from_path != t.from_path:
                r.add_on_error(
                    t.from_path,
                    f"destination {t.to_path} already produced by {existing.from_path}",
                )
                continue
            self._set[key] = t
        return r

    def update(self, other: "TranslationSet") -> None:
        """
        Union other into this set, letting other's edges win

        Used when a later pass fills in a value an earlier pass left unset.
        """
        self._set.update(other._set)

    def prefixed(
        self, from_prefix: Tuple[Segment, ...], to_prefix: Tuple[Segment, ...]
    ) -> "TranslationSet":
        """Return a copy with prefixes prepended to source and destination paths"""
        ret = TranslationSet(self.from_tag, self.to_tag)
        for t in self._set.values():
            ret.add_translation(
                t.from_path.prepend(*from_prefix), t.to_path.prepend(*to_prefix), t.kind
            )
        return ret

    def get(self, to_path: ContextPath) -> Optional[Translation]:
        return self._set.get(to_path.path)

    def __contains__(self, to_path: ContextPath) -> bool:
        return to_path.path in self._set

    def __iter__(self) -> Iterator[Translation]:
        return iter(list(self._set.values()))

    def __len__(self) -> int:
        return len(self._set)

    def __str__(self) -> str:
        return "\n".join(str(t) for t in self._set.values())


def _value_paths(value: Any, prefix: ContextPath) -> List[ContextPath]:
    """List the paths of every non-None location nested inside value"""
    paths: List[ContextPath] = []
    if isinstance(value, BaseModel):
        for name, field in type(value).model_fields.items():
            child = getattr(value, name)
            if child is None:
                continue
            child_path = prefix.append(field.alias or name)
            paths.extend(_value_paths(child, child_path))
            paths.append(child_path)
    elif isinstance(value, list):
        for i, child in enumerate(value):
            child_path = prefix.append(i)
            paths.extend(_value_paths(child, child_path))
            paths.append(child_path)
    return paths
