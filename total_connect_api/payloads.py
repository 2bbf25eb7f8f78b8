"""Parse the XML bodies returned by the legacy API."""

import logging
from typing import Any, Optional
from xml.etree import ElementTree

_LOGGER = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """Strip the namespace from a tag."""
    return tag.rsplit("}", 1)[-1]


def _element_to_value(element: ElementTree.Element) -> Any:
    children = list(element)
    if not children:
        return (element.text or "").strip()

    result: dict[str, Any] = {}
    for child in children:
        name = _local_name(child.tag)
        value = _element_to_value(child)
        if name in result:
            if not isinstance(result[name], list):
                result[name] = [result[name]]
            result[name].append(value)
        else:
            result[name] = value
    return result


def xml_to_dict(text: str) -> Optional[dict[str, Any]]:
    """Convert an XML body into nested dicts keyed by tag name.

    Repeated children become lists and leaves become their stripped text.
    Returns None when the body is not XML.
    """
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as err:
        _LOGGER.error("Problems decoding XML response %s: %s", text, err)
        return None
    return {_local_name(root.tag): _element_to_value(root)}


def as_list(value: Any) -> list[Any]:
    """Return XML children as a list whether one or many were sent."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def result_of(body: Optional[dict[str, Any]], key: Optional[str] = None) -> dict[str, Any]:
    """Return the result element, the named one or the first carrying a ResultCode."""
    if not isinstance(body, dict):
        return {}
    if key is not None:
        value = body.get(key)
        return value if isinstance(value, dict) else {}
    for value in body.values():
        if isinstance(value, dict) and "ResultCode" in value:
            return value
    return {}


def result_code_of(body: Optional[dict[str, Any]], key: Optional[str] = None) -> Optional[str]:
    """Return the raw ResultCode of a parsed body."""
    return result_of(body, key).get("ResultCode")
