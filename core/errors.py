from typing import Dict, Optional


class ValidationError(Exception):
    """Field-level form errors; raised before any backend call."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))

    def first(self) -> Optional[str]:
        return next(iter(self.errors.values()), None)


class BackendError(Exception):
    def __init__(self, message: str = "", code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class AuthError(BackendError):
    pass
