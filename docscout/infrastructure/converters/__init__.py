from .apple_json_converter import AppleDocJSONConverter
from .html_converter import HTMLMarkdownConverter

__all__ = ["AppleDocJSONConverter", "HTMLMarkdownConverter"]
