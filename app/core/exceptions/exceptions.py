class AppError(Exception):
    """Base class for all application-level errors."""
    code = "INTERNAL_ERROR"


class DomainError(AppError):
    """Base for domain logic errors."""
    code = "BAD_REQUEST"

class NotFoundError(DomainError):
    code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id) -> None:
        self.resource = resource
        self.resource_id = resource_id
        self.message = f"{resource} '{resource_id}' not found."
        super().__init__(self.message)

class ShopNotFoundError(NotFoundError):
    def __init__(self, shop_id) -> None:
        super().__init__("Shop", shop_id)

class InvalidQueryFieldError(DomainError):
    code = "INVALID_FIELD"

    def __init__(self, field: str, detail: str = "") -> None:
        self.field = field
        self.message = f"Field '{field}' can't be used here{': ' + detail if detail else ''}."
        super().__init__(self.message)



class InfrastructureError(AppError):
    """Base for infrastructure-related errors (DB, cache, etc)."""
    pass

class DatabaseConnectionError(InfrastructureError):
    def __init__(self, db_name: str):
        self.message = f"Could not connect to database '{db_name}'"
        super().__init__(self.message)
