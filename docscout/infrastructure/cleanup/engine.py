import logging
import re
from typing import Sequence

from docscout.core.models.cleanup import CleanupRule

logger = logging.getLogger(__name__)


class CleanupRuleEngine:
    """Applies an ordered chain of cleanup rules to converted markdown."""

    def __init__(self, rules: Sequence[CleanupRule]):
        """Initialize engine.

        Args:
            rules: Rules in execution order (boundaries, literals, regexes, line filters).
        """
        self._rules = tuple(rules)
        self._broken: set[int] = set()

    @property
    def rules(self) -> tuple[CleanupRule, ...]:
        return self._rules

    def clean(self, markdown: str) -> str:
        """Strip boilerplate from markdown.

        The chain is re-run until the output stops changing, so cleaning an
        already cleaned document is a no-op.
        """
        result = self._run_chain(markdown)
        # Rules only delete text, so the chain reaches a fixpoint.
        while True:
            again = self._run_chain(result)
            if again == result:
                return result
            result = again

    def _run_chain(self, markdown: str) -> str:
        result = markdown
        for index, rule in enumerate(self._rules):
            if index in self._broken:
                continue
            try:
                result = rule.apply(result)
            except re.error as e:
                self._broken.add(index)
                logger.warning(f"Skipping cleanup rule #{index} ({rule!r}): {e}")
        return normalize_whitespace(result)


def normalize_whitespace(markdown: str) -> str:
    """Trim line ends, cap blank runs at two and end with a single newline."""
    normalized: list[str] = []
    blank_run = 0

    for line in markdown.split("\n"):
        line = line.rstrip()
        if line.strip():
            blank_run = 0
        else:
            line = ""
            blank_run += 1
            if blank_run > 2:
                continue
        normalized.append(line)

    result = "\n".join(normalized).strip()
    return f"{result}\n" if result else ""
