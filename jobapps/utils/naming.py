"""
Key-casing conversion for schema-flexible application documents.

Documents at rest use underscore-delimited keys (``resume_url``); documents
in transport (API bodies, bus messages) use camel-delimited keys
(``resumeUrl``). Both conversions recurse into nested documents and into
arrays of documents; every other value passes through untouched.
"""

from typing import Any, Callable, Dict

SEPARATOR = "_"


def to_snake_key(key: str) -> str:
    """resumeUrl -> resume_url"""
    chars = []
    for i, ch in enumerate(key):
        if ch.isupper() and i > 0:
            chars.append(SEPARATOR)
        chars.append(ch)
    return "".join(chars).lower()


def to_camel_key(key: str) -> str:
    """resume_url -> resumeUrl"""
    head, *rest = key.split(SEPARATOR)
    return head.lower() + "".join(part[:1].upper() + part[1:].lower() for part in rest)


def _convert(value: Any, convert_key: Callable[[str], str]) -> Any:
    if isinstance(value, dict):
        return {convert_key(k) if isinstance(k, str) else k: _convert(v, convert_key) for k, v in value.items()}
    if isinstance(value, list):
        return [_convert(item, convert_key) if isinstance(item, dict) else item for item in value]
    return value


def to_storage(document: Dict[str, Any]) -> Dict[str, Any]:
    """Rename every key to the storage (underscore) convention."""
    return _convert(document, to_snake_key)


def to_transport(document: Dict[str, Any]) -> Dict[str, Any]:
    """Rename every key to the transport (camel) convention."""
    return _convert(document, to_camel_key)
