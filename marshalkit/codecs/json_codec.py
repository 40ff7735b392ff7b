"""JSON text codec.

Decoding errors (json.JSONDecodeError) surface unwrapped.
"""

import json
from typing import Any, Union

from ..utils import to_json_text


def decode_json(text: Union[str, bytes]) -> Any:
    """Decode JSON text into plain data."""
    return json.loads(text)


def decode_json_object(text: Union[str, bytes]) -> dict:
    """Decode JSON text that must hold an object.

    Raises:
        json.JSONDecodeError: If the text is malformed
        TypeError: If the text holds anything but an object
    """
    data = decode_json(text)
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def encode_json(data: Any, pretty: bool = False) -> str:
    """Encode plain data as JSON text (4-space indent when pretty)."""
    return to_json_text(data, pretty=pretty)
