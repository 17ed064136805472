"""Layout: document IR, builder and width-aware engine.

Architecture:
layout/
├── __init__.py          # Re-exports
├── doc.py               # Text, Concat, Indent, Line, HardLine, Group
├── builder.py           # syntax tree -> document
└── engine.py            # document -> text under a column budget

"""

from schemat.layout.builder import DocumentBuilder, build
from schemat.layout.doc import (
    HARD_LINE,
    LINE,
    Concat,
    Doc,
    Group,
    HardLine,
    Indent,
    Line,
    Text,
    concat,
    group,
    indent,
    join,
    text,
)
from schemat.layout.engine import LayoutEngine, render

__all__ = [
    "HARD_LINE",
    "LINE",
    "Concat",
    "Doc",
    "DocumentBuilder",
    "Group",
    "HardLine",
    "Indent",
    "LayoutEngine",
    "Line",
    "Text",
    "build",
    "concat",
    "group",
    "indent",
    "join",
    "render",
    "text",
]
