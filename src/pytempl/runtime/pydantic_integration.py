from typing import Any, Optional, Tuple

from pydantic_core import PydanticSerializationError, to_json


def encode_json(value: Any) -> Tuple[str, Optional[Exception]]:
    """
    Encode a value as compact JSON for use as a script argument.

    pydantic-core handles the plain JSON types plus dataclasses, pydantic
    models, datetimes, UUIDs, enums, sets and bytes. NaN and infinities are
    written as ``null`` so the output is always valid JSON.

    Returns:
        (json_text, None) on success.
        ("", error) when the value cannot be encoded. The empty string is the
        encoder's error value; callers decide whether to use it.
    """
    try:
        return to_json(value, inf_nan_mode="null").decode("utf-8"), None
    except (PydanticSerializationError, TypeError, ValueError) as e:
        return "", e
