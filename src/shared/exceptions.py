"""
Custom exception hierarchy for the star navigator.

All navigator errors inherit from NavigatorError so they can be caught
uniformly at the gateway level.
"""


class NavigatorError(Exception):
    """Base exception for all navigator errors."""

    def __init__(self, message: str, component: str = "unknown"):
        self.component = component
        super().__init__(f"[{component}] {message}")


class GraphLoadError(NavigatorError):
    """The graph document could not be fetched."""

    def __init__(self, message: str):
        super().__init__(message, component="loader")


class DocumentParseError(GraphLoadError):
    """The graph document was fetched but is not a valid graph."""
    pass


class UploadError(NavigatorError):
    """A replacement document could not be accepted or persisted."""

    def __init__(self, message: str):
        super().__init__(message, component="upload")


class InvalidFocusError(NavigatorError):
    """The requested focus key does not exist in the current graph."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown focus node: {key!r}", component="star_builder")
