"""Normalization of the arguments accepted by element operations.

Element operations take a free-form argument list. Three shapes of
attribute input are merged into a single dictionary before any node is
built:

* mapping objects: ``{"id": "main"}``
* flag pairs: ``"-id", "main"`` (a string starting with ``-`` followed by
  at least one character names an attribute; the next argument is its value)
* keyword arguments: ``id="main"``, with one trailing underscore stripped so
  that reserved words can be used (``class_="x"``)

Every other argument is content. Content and attribute values are escaped;
``None`` content becomes the empty string and ``None`` attribute values are
recorded as missing and replaced by the empty string.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from incremental_xml_writer.character import escape_xml

ATTRIBUTE_FLAG = "-"


@dataclass
class NormalizedArguments:
    """Attributes and content extracted from an element call."""

    attributes: Dict[str, str] = field(default_factory=dict)
    content: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def inline_content(self) -> Optional[str]:
        """Joined content, or None when no content argument was given."""
        if not self.content:
            return None
        return "".join(self.content)


def is_attribute_flag(value: Any) -> bool:
    """Check whether an argument names an attribute (``"-name"``)."""
    return (
        isinstance(value, str)
        and len(value) > 1
        and value.startswith(ATTRIBUTE_FLAG)
    )


def keyword_attribute_name(name: str) -> str:
    """Map a Python keyword argument name to an attribute name."""
    if len(name) > 1 and name.endswith("_"):
        return name[:-1]
    return name


def normalize_attribute_value(value: Any) -> Optional[str]:
    """Convert an attribute value to escaped text; None stays None."""
    if value is None:
        return None
    return escape_xml(str(value))


def normalize_attributes(
    attributes: Mapping[str, Any],
    missing: Optional[List[str]] = None
) -> Dict[str, str]:
    """Normalize a mapping of attributes, recording keys whose value is None."""
    normalized: Dict[str, str] = {}
    for key, value in attributes.items():
        text = normalize_attribute_value(value)
        if text is None:
            if missing is not None:
                missing.append(key)
            text = ""
        normalized[key] = text
    return normalized


def normalize_arguments(
    args: Sequence[Any],
    keyword_attributes: Optional[Mapping[str, Any]] = None
) -> NormalizedArguments:
    """Split element call arguments into attributes and content.

    Later attribute inputs override earlier ones; keyword attributes are
    applied last.
    """
    result = NormalizedArguments()

    position = 0
    while position < len(args):
        arg = args[position]
        if isinstance(arg, Mapping):
            result.attributes.update(normalize_attributes(arg, result.missing))
        elif is_attribute_flag(arg):
            value = args[position + 1] if position + 1 < len(args) else None
            result.attributes.update(
                normalize_attributes({arg[len(ATTRIBUTE_FLAG):]: value}, result.missing)
            )
            position += 1
        elif arg is None:
            result.content.append("")
        else:
            result.content.append(escape_xml(str(arg)))
        position += 1

    if keyword_attributes:
        renamed = {
            keyword_attribute_name(name): value
            for name, value in keyword_attributes.items()
        }
        result.attributes.update(normalize_attributes(renamed, result.missing))

    return result
