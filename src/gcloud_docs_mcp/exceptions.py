"""
Exceptions for the Google Cloud docs MCP server
"""


class DocsError(Exception):
    """Base exception for documentation retrieval errors"""
    pass


class FetchError(DocsError):
    """Raised when a page cannot be fetched (timeout, DNS, connection)"""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class ConfigurationError(DocsError):
    """Raised when an environment variable holds a malformed value"""

    def __init__(self, variable: str, value: str, expected: str):
        super().__init__(f"{variable} must be {expected}, got {value!r}")
        self.variable = variable
        self.value = value
