"""Typed errors raised by the services.

Every error is an ``HTTPException`` so routers let it propagate unchanged;
``code`` is the machine-readable identifier returned next to ``detail``.
"""
from fastapi import HTTPException


class InventoryError(HTTPException):
    status_code = 500
    code = "error"
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class NotFound(InventoryError):
    status_code = 404
    code = "not_found"
    default_detail = "Record not found"


class InvalidInput(InventoryError):
    status_code = 400
    code = "invalid_input"
    default_detail = "Invalid input"


class InvalidTarget(InvalidInput):
    code = "invalid_target"
    default_detail = "Target type and id are required"


class InvalidFilter(InvalidInput):
    code = "invalid_filter"
    default_detail = "A valid filter parameter is required ('state', 'model_id'/'modelId' or 'provider')"


class Conflict(InventoryError):
    status_code = 409
    code = "conflict"
    default_detail = "Conflicting request"


class DuplicateEntity(Conflict):
    code = "duplicate"
    default_detail = "Record already exists"


class EntityInUse(Conflict):
    code = "entity_in_use"
    default_detail = "Record is still referenced"


class AssetAlreadyAssigned(Conflict):
    code = "asset_already_assigned"
    default_detail = "Asset is already assigned"


class AssetNotAssigned(Conflict):
    code = "asset_not_assigned"
    default_detail = "Asset has no active assignment"


class AssetNotAssignable(Conflict):
    code = "asset_not_assignable"
    default_detail = "Asset cannot be assigned in its current state"


class ConcurrentModification(Conflict):
    code = "concurrent_modification"
    default_detail = "Asset was modified by another request, reload and retry"


class TransactionFailure(InventoryError):
    status_code = 500
    code = "transaction_failure"
    default_detail = "Transaction could not be committed"
