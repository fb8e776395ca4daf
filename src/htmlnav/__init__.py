from .attributes import AttributeScanner
from .navigator import HtmlNavigator, NavigatorOpts
from .source import CharSource
from .tokens import ParseError, StrictModeError, Tag

__all__ = [
    "AttributeScanner",
    "CharSource",
    "HtmlNavigator",
    "NavigatorOpts",
    "ParseError",
    "StrictModeError",
    "Tag",
]
