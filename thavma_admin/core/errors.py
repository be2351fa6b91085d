"""
Error types shared across modules.

Both are ValueError subclasses: routes catch them together with any other
failure and answer with their generic 500 message.
"""


class ValidationError(ValueError):
    """A record failed its schema checks (required field, enum, non-empty list)"""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class UploadError(ValueError):
    """An uploaded file was rejected before anything was written"""
