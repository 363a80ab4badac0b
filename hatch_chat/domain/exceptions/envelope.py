"""
EnvelopeValidationError - Inbound chat payload failed ingress validation.
Maps to: INVALID_ENVELOPE error frame / HTTP 400
"""


class EnvelopeValidationError(Exception):
    code = "INVALID_ENVELOPE"

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []
