class SearchFailure(Exception):
    """Raised when the search provider call fails.

    Distinct from an empty result set, which is a normal outcome.
    """


class SearchAuthError(SearchFailure):
    """Raised when the provider rejects the API key."""


class SearchQuotaError(SearchFailure):
    """Raised when the provider reports an exhausted quota or rate limit."""
