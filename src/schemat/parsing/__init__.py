"""Parsing support for the schemat parser.

Provides:
- TokenNavigationMixin: token stream access and error construction
- ListFrame / FrameStack: the explicit stack of open lists
"""

from schemat.parsing.frames import FrameStack, ListFrame
from schemat.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "FrameStack",
    "ListFrame",
    "TokenNavigationMixin",
]
