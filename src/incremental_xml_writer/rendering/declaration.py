"""Document-level fragments emitted around the rendered forest."""


def xml_declaration(encoding: str) -> str:
    """Return the XML declaration for encoding (no trailing newline)."""
    return f'<?xml version="1.0" encoding="{encoding}" ?>'


def library_marker(name: str, version: str) -> str:
    """Return the trailing comment identifying the library that wrote a document."""
    return f"<!-- {name} v{version} -->"
