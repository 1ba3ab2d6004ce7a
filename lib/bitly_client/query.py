from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode


def _literal(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def normalize_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None`` values and turn booleans into ``"true"``/``"false"``.

    List and tuple values are normalized element-wise and come back as lists.
    """
    out: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            out[key] = [_literal(item) for item in value if item is not None]
        else:
            out[key] = _literal(value)
    return out


def encode_params(params: Mapping[str, Any]) -> str:
    """Encode ``params`` as a query string.

    Sequence values repeat the key once per element in order
    (``tag=a&tag=b``); keys never get a ``[]`` suffix.
    """
    pairs: list[tuple[str, Any]] = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((key, item) for item in value)
        else:
            pairs.append((key, value))
    return urlencode(pairs)
