from .client import SAFARI_USER_AGENTS, DocsHttpClient, parse_retry_after, raise_for_status

__all__ = ["SAFARI_USER_AGENTS", "DocsHttpClient", "parse_retry_after", "raise_for_status"]
