"""
Domain Errors
Raised inside the domain, translated at the service/API boundary
"""


class AssetValidationError(ValueError):
    """Base for user-correctable input errors that abort a calculation"""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidGoalError(AssetValidationError):
    """Goal is not a number or is not positive"""

    error_code = "INVALID_GOAL"


class NoValidAssetsError(AssetValidationError):
    """Every asset row was dropped by validation"""

    error_code = "NO_VALID_ASSETS"


class ConfigurationNotFoundError(LookupError):
    """Named configuration does not exist"""

    error_code = "CONFIGURATION_NOT_FOUND"

    def __init__(self, name: str):
        super().__init__(f"Configuration '{name}' not found")
        self.name = name


class DraftRowNotFoundError(LookupError):
    """Session draft has no row with the given id"""

    error_code = "ROW_NOT_FOUND"

    def __init__(self, row_id: int):
        super().__init__(f"Row {row_id} not found")
        self.row_id = row_id
