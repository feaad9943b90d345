"""
Inventory error taxonomy.

Every error carries the HTTP status it maps to; the handlers registered in
``vdv_inventory.main`` turn them into ``{"error": message}`` responses.
"""


class InventoryError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    status_code = 400


class DuplicateId(InventoryError):
    status_code = 400


class NotFound(InventoryError):
    status_code = 404


class Unauthorized(InventoryError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class Conflict(InventoryError):
    status_code = 409
