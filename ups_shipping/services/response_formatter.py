"""
UPS XML response conversion.

Parsed response trees are converted into nested dicts:
- an element with no children and no attributes becomes its stripped text
- repeated sibling tags become a list, in document order
- attributes are kept under "@attributes"
- text mixed with child elements is kept under "#text"
- namespace prefixes are dropped from tags and attribute names

ResponseDocument wraps the result with dotted-path accessors, e.g.
``doc.get("ShipmentResults.PackageResults.0.TrackingNumber")``.
"""
import copy
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"

_MISSING = object()


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def convert_element(element: ET.Element) -> Any:
    children = list(element)
    text = (element.text or "").strip()

    if not children and not element.attrib:
        return text

    result: Dict[str, Any] = {}

    if element.attrib:
        result[ATTRIBUTES_KEY] = {local_name(k): v for k, v in element.attrib.items()}

    repeated = set()
    for child in children:
        key = local_name(child.tag)
        value = convert_element(child)

        if key not in result:
            result[key] = value
        elif key in repeated:
            result[key].append(value)
        else:
            result[key] = [result[key], value]
            repeated.add(key)

    if text:
        result[TEXT_KEY] = text

    return result


class ResponseDocument(Mapping):
    """
    Read-only view over a converted UPS response.

    Nested mappings are returned as ResponseDocument; ``raw`` is the source
    element when the document was built from one.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, raw: Optional[ET.Element] = None):
        self._data = data or {}
        self._raw = raw

    @classmethod
    def from_element(cls, element: Optional[ET.Element], exclude: Iterable[str] = ()) -> "ResponseDocument":
        if element is None:
            return cls({})

        converted = convert_element(element)
        if not isinstance(converted, dict):
            converted = {TEXT_KEY: converted} if converted else {}

        for key in exclude:
            converted.pop(key, None)

        return cls(converted, raw=element)

    @property
    def raw(self) -> Optional[ET.Element]:
        return self._raw

    def __getitem__(self, key: str) -> Any:
        return self._wrap(self._data[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return self._resolve(path) is not _MISSING

    def __repr__(self) -> str:
        return f"ResponseDocument({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResponseDocument):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def get(self, path: str, default: Any = None) -> Any:
        """
        Look up a dotted path. Integer segments index into lists.

        Returns ``default`` when any segment is missing.
        """
        value = self._resolve(path)
        if value is _MISSING:
            return default
        return self._wrap(value)

    def get_list(self, path: str) -> List[Any]:
        """Like get(), but always a list: single repeated elements convert to a dict."""
        value = self._resolve(path)
        if value is _MISSING or value is None:
            return []
        if not isinstance(value, list):
            value = [value]
        return [self._wrap(item) for item in value]

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def _resolve(self, path: str) -> Any:
        current: Any = self._data
        for segment in path.split("."):
            if isinstance(current, dict):
                if segment not in current:
                    return _MISSING
                current = current[segment]
            elif isinstance(current, list) and segment.lstrip("-").isdigit():
                index = int(segment)
                if not -len(current) <= index < len(current):
                    return _MISSING
                current = current[index]
            else:
                return _MISSING
        return current

    @staticmethod
    def _wrap(value: Any) -> Any:
        if isinstance(value, dict):
            return ResponseDocument(value)
        if isinstance(value, list):
            return [ResponseDocument(item) if isinstance(item, dict) else item for item in value]
        return value
