"""Documentation source identifiers."""
from enum import Enum


class Source(str, Enum):
    """Documentation sites a retriever can talk to."""
    APPLE_DOCS = "apple-docs"
    HACKING_WITH_SWIFT = "hackingwithswift"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: str) -> "Source":
        """Resolve a source from its identifier, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            known = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown source '{value}' (known: {known})") from None


_DISPLAY_NAMES = {
    Source.APPLE_DOCS: "Apple Developer Documentation",
    Source.HACKING_WITH_SWIFT: "Hacking with Swift",
}
