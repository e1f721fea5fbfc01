"""
Error taxonomy.

NetworkFailure and SourceFormatChange are raised by adapters and turned into
per-season failure records by the router. UnsupportedQuery is raised before
any fetch. Unparseable field values never raise; they are flagged in-row.
"""


class UsportsError(Exception):
    """Base class for all usportstats errors."""


class NetworkFailure(UsportsError):
    """Source unreachable, timed out or kept failing after retries."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class SourceFormatChange(UsportsError):
    """Page structure no longer matches what the adapter expects."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class UnsupportedQuery(UsportsError, ValueError):
    """Sport/gender/season/kind combination not offered by any source."""


class UnresolvedAlias(UsportsError, LookupError):
    """A raw university name matched no known alias, or more than one university."""

    def __init__(self, raw_name: str, candidates: tuple[str, ...] = ()):
        if candidates:
            message = f'Ambiguous university alias: {raw_name!r} could be any of {list(candidates)}'
        else:
            message = f'Unresolved university alias: {raw_name!r}'
        super().__init__(message)
        self.raw_name = raw_name
        self.candidates = tuple(candidates)


class RequestFailed(UsportsError):
    """Every season of a request failed."""

    def __init__(self, message: str, failures: list):
        super().__init__(message)
        self.failures = failures


class PartialSeasonFailure(UsportsError):
    """Some seasons failed while others succeeded (raised only in strict mode)."""

    def __init__(self, message: str, result):
        super().__init__(message)
        self.result = result

    @property
    def failures(self) -> list:
        return self.result.failures
