from typing import Any, Dict, Optional
from fastapi import status


class BaseAPIException(Exception):
    """
    Parent class for every custom error raised by the service.
    Keeps the error payload returned to clients uniform.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


# =========================================================
# 1. REQUEST ERRORS
# =========================================================

class ValidationException(BaseAPIException):
    """400: missing or out-of-range input"""
    def __init__(self, message: str = "Données invalides", details: dict = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class InvalidIdException(BaseAPIException):
    """400: path identifier is not a positive integer"""
    def __init__(self, message: str = "ID invalide"):
        super().__init__(
            message=message,
            code="INVALID_ID",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class NotFoundException(BaseAPIException):
    """404: target or parent row does not exist"""
    def __init__(self, message: str = "Ressource non trouvée"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )


# =========================================================
# 2. STORE ERRORS
# =========================================================

class DuplicateKeyException(BaseAPIException):
    """400: a unique constraint rejected the insert"""
    def __init__(self, message: str = "Cette valeur existe déjà", details: dict = None):
        super().__init__(
            message=message,
            code="DUPLICATE_KEY",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class StoreFailureException(BaseAPIException):
    """
    500: any other database failure. The driver detail is logged by the
    raiser and never sent to the client.
    """
    def __init__(self, message: str = "Erreur serveur"):
        super().__init__(
            message=message,
            code="STORE_FAILURE",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
