"""Error taxonomy shared by the core services and the HTTP layer.

Every error carries an HTTP status and a stable ``code`` so clients can branch
on the kind of failure without parsing the message.
"""
from typing import Any


class AppError(Exception):
    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TableNotFoundError(AppError):
    status_code = 400
    code = "table_not_found"

    def __init__(self, table: str):
        super().__init__(f"Table '{table}' does not exist")
        self.table = table


class InvalidTableError(TableNotFoundError):
    code = "invalid_table"


class RecordNotFoundError(AppError):
    status_code = 404
    code = "not_found"

    def __init__(self, table: str, record_id: Any):
        super().__init__("Not found")
        self.table = table
        self.record_id = record_id


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"


class InvalidColumnError(ValidationError):
    code = "invalid_column"

    def __init__(self, table: str, column: str):
        super().__init__(f"Unknown column '{column}' for table '{table}'")
        self.table = table
        self.column = column


class ConflictError(AppError):
    status_code = 400
    code = "conflict"
