"""Small helpers shared by the codecs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

if TYPE_CHECKING:
    from collections.abc import Sequence

# Stores served by the host API itself never receive form values.
_UNTEMPLATED_SCHEMES = ("api://",)

# Unreserved punctuation kept as is in parameter names, on top of alphanumerics and `-_.`.
_UNESCAPED_PARAM_CHARS = "!*'()~"


def no_empty(text: str | None) -> str | None:
    """Return stripped text, or None when it is missing or blank.

    Args:
        text (str | None): Raw label or help text.

    Returns:
        str | None: Stripped text or None.
    """
    if text is None:
        return None
    return text.strip() or None


def describe(result: dict[str, Any], *, label: str | None, help_text: str | None) -> dict[str, Any]:
    """Add `title`/`description` to a JSON Schema node when they carry text.

    Args:
        result (dict[str, Any]): Node being built.
        label (str | None): Forman label.
        help_text (str | None): Forman help.

    Returns:
        dict[str, Any]: The same node.
    """
    title = no_empty(label)
    if title is not None:
        result["title"] = title
    description = no_empty(help_text)
    if description is not None:
        result["description"] = description
    return result


def append_query_string(url: str, params: Sequence[str]) -> str:
    """Append mustache placeholders named after `params` to an RPC store URL.

    Args:
        url (str): Store URL, e.g. `rpc://nestedFunction`.
        params (Sequence[str]): Parameter names, e.g. `("connection",)`.

    Returns:
        str: URL such as `rpc://nestedFunction?connection={{connection}}`.
    """
    if not params or url.startswith(_UNTEMPLATED_SCHEMES):
        return url

    query = "&".join(f"{quote(param, safe=_UNESCAPED_PARAM_CHARS)}={{{{{param}}}}}" for param in params)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
