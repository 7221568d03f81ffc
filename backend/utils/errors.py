# backend/utils/errors.py
from fastapi import HTTPException, status


# Base class for inventory domain failures.
# Raised from services and routers alike; FastAPI renders them as {"detail": ...}.
class InventoryError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Error de inventario"

    def __init__(self, detail: str = None, headers: dict = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail, headers=headers)


class NotFound(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Recurso no encontrado"


class ItemNotFound(NotFound):
    default_detail = "Item no encontrado"


class LocationNotFound(NotFound):
    default_detail = "Ubicación no encontrada"


class UserNotFound(NotFound):
    default_detail = "Usuario no encontrado"


class NoteNotFound(NotFound):
    default_detail = "Nota no encontrada"


# Duplicate SKU/username, stale version or a still-referenced record
class Conflict(InventoryError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflicto con el estado actual"


class InvalidCredentials(InventoryError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Credenciales inválidas"

    def __init__(self, detail: str = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InsufficientStock(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Stock insuficiente"


class ValidationError(InventoryError):
    status_code = 422
    default_detail = "Datos inválidos"
