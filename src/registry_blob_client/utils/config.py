"""Decoding of JSON config blobs into caller models."""

import dataclasses
import json
from typing import Any, Callable, Optional, Union

from ..exceptions import ConfigDecodeError

ConfigModel = Optional[Union[type, Callable[[Any], Any]]]


def parse_config_json(data: Union[bytes, str]) -> Any:
    """Parse config blob content as JSON.

    Raises:
        ConfigDecodeError: If content is not well-formed UTF-8 JSON
    """
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigDecodeError(f"Config blob is not valid JSON: {e}") from e


def build_dataclass(model: type, data: Any) -> Any:
    """Construct a dataclass instance from a decoded JSON object.

    Unknown keys are ignored and missing keys fall back to field defaults.
    """
    if not isinstance(data, dict):
        raise ConfigDecodeError(
            f"Expected JSON object for {model.__name__}, got {type(data).__name__}"
        )

    names = {f.name for f in dataclasses.fields(model) if f.init}
    kwargs = {key: value for key, value in data.items() if key in names}
    try:
        return model(**kwargs)
    except TypeError as e:
        raise ConfigDecodeError(
            f"Config does not match {model.__name__}: {e}"
        ) from e


def decode_config(data: Union[bytes, str], model: ConfigModel = None) -> Any:
    """Decode config blob content into model.

    Args:
        data: Raw blob content
        model: None for plain JSON, a dataclass type, or a callable taking
            the decoded value

    Returns:
        Decoded value or model instance

    Raises:
        ConfigDecodeError: If decoding fails or content does not fit the model
    """
    decoded = parse_config_json(data)
    if model is None:
        return decoded

    if dataclasses.is_dataclass(model) and isinstance(model, type):
        return build_dataclass(model, decoded)

    try:
        return model(decoded)
    except (TypeError, ValueError, KeyError) as e:
        raise ConfigDecodeError(f"Config does not match model: {e}") from e
