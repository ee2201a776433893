from typing import Optional


class StorefrontError(Exception):
    """Erro base das regras de negócio da loja."""


class CartValidationError(StorefrontError, ValueError):
    pass


class CorruptCartError(StorefrontError):
    """O carrinho persistido não pôde ser migrado/validado."""


class FetchError(StorefrontError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ReorderRejectedError(StorefrontError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotAuthenticatedError(ReorderRejectedError):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)
