from wellbeing.errors import ValidationError


def require_label(field: str, value) -> str:
    """
    Check a category, type or value label and return it trimmed.

    Blank labels would create keys nobody can address from the UI.
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    label = value.strip()
    if not label:
        raise ValidationError(f"{field} must not be blank")
    return label


def require_values(values) -> list[str]:
    if not isinstance(values, (list, tuple)):
        raise ValidationError("values must be a list of strings")
    if not all(isinstance(value, str) for value in values):
        raise ValidationError("values must be a list of strings")
    return list(values)
