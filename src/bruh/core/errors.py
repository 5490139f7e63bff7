"""Filter configuration errors."""


class FilterError(ValueError):
    """Base class for invalid smart filter configurations."""

    pass


class InvalidFieldError(FilterError):
    """A condition or sort references a field outside the task schema."""

    def __init__(self, field: str | None):
        self.field = field
        if field is None:
            super().__init__("Missing field")
        else:
            super().__init__(f"Unknown field: {field!r}")


class InvalidOperatorError(FilterError):
    """An operator is not applicable to the field's type."""

    def __init__(self, field: str, operator: str, field_type: str):
        self.field = field
        self.operator = operator
        self.field_type = field_type
        super().__init__(f"Operator {operator!r} is not valid for {field_type} field {field!r}")


class InvalidValueError(FilterError):
    """A condition value, logic mode or sort direction cannot be used."""

    pass
