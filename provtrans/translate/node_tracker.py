"""
Node tracker

Index of destination filesystem nodes by path, used while synthesizing
entries from directory trees. A path belongs to at most one category
(file, directory, link). Entries keep the position they were assigned in
their destination list, so positions can be used to build provenance
paths.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from ..schema import destination as dst


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    LINK = "link"


class NodeTracker:
    """Path index over a destination Storage section"""

    def __init__(self, storage: dst.Storage):
        self._storage = storage
        self._index: Dict[str, Tuple[NodeKind, int]] = {}

        for i, f in enumerate(storage.files or []):
            self._index[f.path] = (NodeKind.FILE, i)
        for i, d in enumerate(storage.directories or []):
            self._index[d.path] = (NodeKind.DIRECTORY, i)
        for i, link in enumerate(storage.links or []):
            self._index[link.path] = (NodeKind.LINK, i)

    def kind(self, path: str) -> Optional[NodeKind]:
        entry = self._index.get(path)
        return entry[0] if entry else None

    def exists(self, path: str) -> bool:
        return path in self._index

    def get_file(self, path: str) -> Tuple[int, Optional[dst.File]]:
        """Return (position, file) for a file at path, or (-1, None)"""
        entry = self._index.get(path)
        if entry is None or entry[0] != NodeKind.FILE:
            return -1, None
        return entry[1], self._storage.files[entry[1]]

    def get_link(self, path: str) -> Tuple[int, Optional[dst.Link]]:
        """Return (position, link) for a link at path, or (-1, None)"""
        entry = self._index.get(path)
        if entry is None or entry[0] != NodeKind.LINK:
            return -1, None
        return entry[1], self._storage.links[entry[1]]

    def add_file(self, file: dst.File) -> Tuple[int, dst.File]:
        """
        Append a new file entry

        Raises:
            ValueError: Something already occupies the path
        """
        self._claim(file.path)
        if self._storage.files is None:
            self._storage.files = []
        self._storage.files.append(file)
        i = len(self._storage.files) - 1
        self._index[file.path] = (NodeKind.FILE, i)
        return i, file

    def add_link(self, link: dst.Link) -> Tuple[int, dst.Link]:
        """
        Append a new link entry

        Raises:
            ValueError: Something already occupies the path
        """
        self._claim(link.path)
        if self._storage.links is None:
            self._storage.links = []
        self._storage.links.append(link)
        i = len(self._storage.links) - 1
        self._index[link.path] = (NodeKind.LINK, i)
        return i, link

    def _claim(self, path: str) -> None:
        if path in self._index:
            raise ValueError(f"node already tracked at {path}")
