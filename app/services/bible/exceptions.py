"""Bible search service exceptions."""


class BibleSearchError(Exception):
    """Base exception for Bible search errors."""

    pass


class VersionLoadError(BibleSearchError):
    """Raised when a translation cannot be fetched or indexed."""

    def __init__(self, version: str, message: str):
        super().__init__(f"Failed to load version {version}: {message}")
        self.version = version


class MissingSourceError(VersionLoadError):
    """Raised when a custom version has no registered source URL."""

    def __init__(self, version: str):
        super().__init__(version, "no custom source URL provided")


class TranslationFormatError(VersionLoadError):
    """Raised when a translation document is not in the expected format."""

    pass
