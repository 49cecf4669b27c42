"""Error types shared by the API layer and the generators."""


class ApiError(Exception):
    """An error that maps directly onto an HTTP error envelope."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_SERVER_ERROR"):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code}


class ModelUnavailableError(RuntimeError):
    """Raised at startup when the LLM server or model cannot be used."""
