class ExportError(Exception):
    """Base class for export failures. Carries the HTTP status to report."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(ExportError):
    status_code = 400


class UnsupportedFormat(ExportError):
    status_code = 400


class RenderFailure(ExportError):
    status_code = 500
