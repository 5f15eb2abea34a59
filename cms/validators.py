"""
Validation for block type tags.

A type tag names the handler that renders a block and owns its payload
schema. Tags are lowercase kebab-case identifiers: they double as
template names, CSS class suffixes and registry keys.
"""

import re

from django.core.validators import RegexValidator

BLOCK_TYPE_MAX_LENGTH = 64
BLOCK_TYPE_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")

validate_block_type = RegexValidator(
    regex=BLOCK_TYPE_PATTERN,
    message=(
        "Block type must be lowercase letters and digits separated by single "
        "hyphens, starting with a letter (e.g. 'call-to-action')."
    ),
    code="invalid_block_type",
)


def is_valid_block_type(value) -> bool:
    """Check a type tag without raising."""
    return (
        isinstance(value, str)
        and len(value) <= BLOCK_TYPE_MAX_LENGTH
        and BLOCK_TYPE_PATTERN.match(value) is not None
    )
