"""Core utility functions for Lantern."""

import re


class PathValidationError(ValueError):
    """Raised when path contains invalid characters or traversal attempts."""

    pass


def normalize_path(path: str) -> str:
    """
    Normalize a content path.

    - Strips leading/trailing slashes
    - Collapses multiple slashes
    - Blocks path traversal
    - Rejects invalid characters

    Args:
        path: Path to normalize

    Returns:
        Normalized path string

    Raises:
        PathValidationError: For invalid paths
    """
    if not path:
        return ""

    # Block null bytes and control characters
    if re.search(r"[\x00-\x1f]", path):
        raise PathValidationError("Path contains invalid characters")

    path = re.sub(r"/+", "/", path)
    path = path.strip("/")

    parts = path.split("/")
    if ".." in parts:
        raise PathValidationError("Path traversal not allowed")

    return path


def kebab_case(name: str) -> str:
    """
    Convert a CamelCase or snake_case name to kebab-case.

    >>> kebab_case("CallToAction")
    'call-to-action'
    >>> kebab_case("FAQList")
    'faq-list'
    """
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1-\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name)
    name = re.sub(r"[\s_]+", "-", name)
    return name.strip("-").lower()


def camel_case(name: str) -> str:
    """
    Convert a kebab-case, snake_case or spaced name to CamelCase.

    >>> camel_case("call-to-action")
    'CallToAction'
    """
    parts = re.split(r"[-_\s]+", name.strip())
    return "".join(part[:1].upper() + part[1:] for part in parts if part)
