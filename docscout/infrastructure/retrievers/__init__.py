from .apple_docs import AppleDocsRetriever, documentation_json_url
from .base import BaseRetriever
from .hacking_with_swift import HackingWithSwiftRetriever

__all__ = [
    "AppleDocsRetriever",
    "BaseRetriever",
    "HackingWithSwiftRetriever",
    "documentation_json_url",
]
