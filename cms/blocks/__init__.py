"""
Block types: the renderers and payload schemas behind Block.type.

    from cms.blocks import BlockType, registry

    handler = registry.get("hero")   # None when the tag is unknown
"""

from .base import BlockType
from .fields import LinesField
from .registry import BlockRegistry, registry

__all__ = ["BlockType", "BlockRegistry", "LinesField", "registry"]
