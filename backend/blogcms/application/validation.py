from typing import Any, Dict, Optional

from blogcms.domain.exceptions import ValidationError


def optional_str(data: Dict[str, Any], key: str, max_length: Optional[int] = None) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string", errors={key: "string expected"})
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"'{key}' cannot exceed {max_length} characters",
            errors={key: f"max {max_length} characters"},
        )
    return value


def required_str(data: Dict[str, Any], key: str, label: str, max_length: Optional[int] = None) -> str:
    value = optional_str(data, key, max_length)
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required", errors={key: "required"})
    return value.strip()


def optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"'{key}' must be an integer", errors={key: "integer expected"})
    return value


def optional_bool(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"'{key}' must be a boolean", errors={key: "boolean expected"})
    return value
