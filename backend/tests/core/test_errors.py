"""Error Taxonomy — each business rule is its own independently matchable error.

Tests:
    - Every error class has a distinct code
    - Validation errors name their field
    - DatabaseError keeps the operation and raw detail apart
"""

from app.core.errors import (
    DatabaseError, DescriptionLengthError, ErrorCategory, InvalidModuleIdError,
    ModuleError, ModuleValidationError, NameExistsError, NameLengthError,
    NameRequiredError, NotFoundError,
)


def _all_errors():
    return [
        NameRequiredError(), NameLengthError(), NameExistsError("Inventory"),
        DescriptionLengthError(), NotFoundError(9), InvalidModuleIdError("abc"),
        DatabaseError("disk full", "commit"),
    ]


def test_codes_are_distinct():
    codes = [e.code for e in _all_errors()]
    assert len(codes) == len(set(codes))


def test_all_errors_share_base():
    assert all(isinstance(e, ModuleError) for e in _all_errors())


def test_business_errors_not_confused():
    assert not isinstance(NameLengthError(), NameRequiredError)
    assert not isinstance(NameExistsError("x"), ModuleValidationError)
    assert not isinstance(NotFoundError(1), ModuleValidationError)


def test_validation_errors_name_field():
    assert NameRequiredError().field == "name"
    assert NameLengthError().field == "name"
    assert DescriptionLengthError().field == "description"
    assert InvalidModuleIdError("abc").field == "id"


def test_categories():
    assert NameExistsError("x").category is ErrorCategory.CONFLICT
    assert NotFoundError(1).category is ErrorCategory.RESOURCE_NOT_FOUND
    assert DatabaseError("x", "commit").category is ErrorCategory.DATABASE


def test_database_error_message():
    err = DatabaseError("disk full", "commit")
    assert err.message == "Database commit failed: disk full"
    assert err.detail == "disk full"
    assert err.operation == "commit"
