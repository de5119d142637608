from .apple_search_parser import AppleSearchResultParser
from .base import RegexSearchResultParser
from .hws_search_parser import HWSSearchResultParser

__all__ = [
    "AppleSearchResultParser",
    "HWSSearchResultParser",
    "RegexSearchResultParser",
]
