"""
Markdown documents with YAML front matter.

Every flat-file record is stored as:

    ---
    title: My site
    background_mode: slideshow
    ---

    Optional Markdown body...
"""

from typing import Any

import yaml

from .exceptions import FrontMatterError

DELIMITER = "---"


def dumps(metadata: dict[str, Any], body: str = "") -> str:
    """Serialize metadata and an optional Markdown body into a document."""
    header = yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    document = f"{DELIMITER}\n{header}{DELIMITER}\n"
    if body:
        document += f"\n{body.rstrip()}\n"
    return document


def loads(text: str) -> tuple[dict[str, Any], str]:
    """
    Split a document into (metadata, body).

    Text that does not open with a delimiter line has no front matter and
    is returned whole as the body.

    Raises:
        FrontMatterError: Unterminated header, invalid YAML, or a header
            that is not a mapping.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        return {}, text

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1:]).strip("\n")
            break
    else:
        raise FrontMatterError("Front matter is missing its closing '---' line")

    try:
        metadata = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(metadata).__name__}"
        )

    return metadata, body
