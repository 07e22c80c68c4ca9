"""Error types raised by the session layer and shown by the GUI."""


class QueryToolError(Exception):
    """Base error carrying a library error code and message."""

    def __init__(self, message, code=0):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        return f"{self.message} (code {self.code})"


class DatabaseConnectionError(QueryToolError):
    """The client library refused to open a session."""


class QueryError(QueryToolError):
    """The client library failed while running a statement."""


class UsageError(QueryToolError):
    """Local validation failure, raised before the library is called."""

    def __init__(self, title, message):
        super().__init__(message)
        self.title = title

    def __str__(self):
        return f"{self.title}: {self.message}"
