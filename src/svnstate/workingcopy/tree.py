"""Rebuild a working-copy tree from a flat status listing.

This is a heuristic: entries are attached to the entry whose path equals
their parent directory, and only entries directly under *root* are
returned. When nothing sits directly under *root* the whole listing is
returned at top level rather than an empty tree.
"""

from __future__ import annotations

import dataclasses
import logging
import posixpath
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

from svnstate.svn.models import FileStatus, NodeKind

logger = logging.getLogger(__name__)


def _key(path: str) -> str:
    return path.replace("\\", "/").rstrip("/")


def _parent_key(key: str) -> str:
    return posixpath.dirname(key).rstrip("/")


def build_status_tree(
    flat: Sequence[FileStatus],
    root: str,
    *,
    case_insensitive: bool = True,
) -> List[FileStatus]:
    """Return the top-level nodes of the tree built from *flat*.

    Input records are not modified; every returned node is a new
    ``FileStatus`` whose ``children`` tuple holds its descendants.
    """
    if not flat:
        return []

    root_key = _key(root)
    keys = [_key(status.path) for status in flat]
    parents = [_parent_key(key) for key in keys]

    # parent key -> indices of entries directly under it
    groups: Dict[str, List[int]] = {}
    for idx, parent in enumerate(parents):
        groups.setdefault(parent or root_key, []).append(idx)

    children_of: Dict[int, List[int]] = {}
    for idx, key in enumerate(keys):
        members = groups.get(key)
        if not members:
            continue
        seen: Set[str] = set()
        picked: List[int] = []
        for member in members:
            if keys[member] == key or flat[member].path in seen:
                continue
            seen.add(flat[member].path)
            picked.append(member)
        if picked:
            children_of[idx] = picked

    memo: Dict[int, FileStatus] = {}

    def materialise(idx: int, visiting: Set[int]) -> FileStatus:
        if idx in memo:
            return memo[idx]
        visiting.add(idx)
        kids: List[FileStatus] = []
        for child in children_of.get(idx, ()):
            if child in visiting:
                logger.debug("cycle at %r, dropping child %r", flat[idx].path, flat[child].path)
                continue
            kids.append(materialise(child, visiting))
        visiting.discard(idx)

        original = flat[idx]
        node = dataclasses.replace(
            original,
            children=tuple(kids),
            node_kind=NodeKind.DIRECTORY if kids else original.node_kind,
        )
        memo[idx] = node
        return node

    def same(a: str, b: str) -> bool:
        return a.casefold() == b.casefold() if case_insensitive else a == b

    top = [
        idx
        for idx in range(len(flat))
        if same(parents[idx], root_key) or (not parents[idx] and same(keys[idx], root_key))
    ]
    if not top:
        logger.debug("no entries directly under %r; returning flat listing", root)
        top = list(range(len(flat)))

    return [materialise(idx, set()) for idx in top]


def iter_tree(nodes: Iterable[FileStatus], depth: int = 0) -> Iterator[Tuple[int, FileStatus]]:
    """Yield ``(depth, node)`` depth-first, parents before their children."""
    for node in nodes:
        yield depth, node
        yield from iter_tree(node.children, depth + 1)
