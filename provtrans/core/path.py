"""
Context paths

A context path names one location inside one document. Paths carry a
format tag so that source-side ("yaml") and destination-side ("json")
locations are never confused:

- $                      -> document root
- $.storage.files[0]     -> record field, then sequence index
- $.storage.files[0].mode

Paths are immutable; descending into a value returns a new path.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

Segment = Union[str, int]


@dataclass(frozen=True)
class ContextPath:
    """Tagged, ordered sequence of path segments"""

    tag: str
    path: Tuple[Segment, ...] = ()

    @classmethod
    def new(cls, tag: str, *segments: Segment) -> "ContextPath":
        """
        Create a path

        Args:
            tag: Document format tag, e.g. "yaml" or "json"
            *segments: Field names (str) and sequence indices (int)

        Returns:
            New ContextPath
        """
        return cls(tag, tuple(segments))

    def append(self, *segments: Segment) -> "ContextPath":
        """Return a new path extended by segments"""
        return ContextPath(self.tag, self.path + tuple(segments))

    def prepend(self, *segments: Segment) -> "ContextPath":
        """Return a new path with segments placed in front"""
        return ContextPath(self.tag, tuple(segments) + self.path)

    def startswith(self, prefix: "ContextPath") -> bool:
        if prefix.tag != self.tag:
            return False
        return self.path[: len(prefix.path)] == prefix.path

    def __len__(self) -> int:
        return len(self.path)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.path)

    def __str__(self) -> str:
        parts = ["$"]
        for seg in self.path:
            if isinstance(seg, int):
                parts.append(f"[{seg}]")
            else:
                parts.append(f".{seg}")
        return "".join(parts)
