"""Exception hierarchy for forces."""


class ForcesError(Exception):
    """Base error for all forces failures."""

    pass


class ParsingError(ForcesError, ValueError):
    """Error extracting data from a page tree."""

    pass


class ElementNotFoundError(ParsingError):
    """An element the extractor depends on is missing from the page."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"{description} not found")


class MalformedPageError(ParsingError):
    """Page structure no longer matches the extractor's assumptions."""

    pass


class InvalidIdentifierError(ForcesError, ValueError):
    """Contest or problem id that cannot be used in a URL or path."""

    pass


class FetchError(ForcesError):
    """Network failure or unexpected HTTP status."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class StorageError(ForcesError):
    """Persisted state could not be read or written."""

    pass


class SessionNotFoundError(StorageError):
    """No session has been recorded yet."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"No session found at {path}; run 'forces train <contest>' first")


class WorkspaceError(ForcesError):
    """Filesystem failure inside the working directory."""

    pass


class TemplateSourceError(WorkspaceError):
    """Template source file is missing or unreadable."""

    pass


class TemplateError(ForcesError):
    """Invalid template registry operation."""

    pass


class SessionError(ForcesError):
    """Invalid session lookup."""

    pass
