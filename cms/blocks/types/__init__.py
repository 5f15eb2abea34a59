"""Built-in block types. Every module here is scanned by the block registry."""
