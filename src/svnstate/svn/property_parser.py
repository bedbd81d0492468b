"""Parser for ``svn proplist`` output, plain, ``--verbose`` and ``--xml``."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from svnstate.svn.models import Property
from svnstate.svn.xmlutil import Document, as_root

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_TARGET_RE = re.compile(r"^Properties on '(?P<path>.*)':$")
_VALUE_INDENT = "    "
_NAME_INDENT = "  "


class PropertyParser:
    """Turn property listings into ``Property`` records.

    The plain listing names one target per ``Properties on '...':`` header,
    property names indented by two spaces, and (with ``--verbose``) value
    lines indented by four.
    """

    def parse_text(self, output: Optional[str]) -> List[Property]:
        if not output or not output.strip():
            return []

        props: List[Property] = []
        path = ""
        name: Optional[str] = None
        value_lines: List[str] = []

        def flush() -> None:
            if name is not None:
                props.append(Property(name=name, value="\n".join(value_lines), path=path))

        for line in _LINE_SPLIT_RE.split(output):
            target = _TARGET_RE.match(line)
            if target:
                flush()
                name, value_lines = None, []
                path = target.group("path")
            elif line.startswith(_VALUE_INDENT) and name is not None:
                value_lines.append(line[len(_VALUE_INDENT):])
            elif line.startswith(_NAME_INDENT) and line.strip():
                flush()
                name, value_lines = line.strip(), []
            elif line.strip():
                logger.debug("skipping property line %r", line)
        flush()
        return props

    def parse_structured(self, document: Document) -> List[Property]:
        props: List[Property] = []
        root = as_root(document)
        if root is None:
            return props

        targets = [root] if root.tag == "target" else list(root.iter("target"))
        for target in targets:
            path = target.get("path", "")
            for node in target.iter("property"):
                name = node.get("name")
                if not name:
                    logger.debug("skipping property without a name under %r", path)
                    continue
                props.append(Property(name=name, value=node.text or "", path=path))
        return props
