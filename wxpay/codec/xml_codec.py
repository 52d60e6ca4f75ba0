"""
XML wire format for parameter maps.

Both directions use a single `<xml>` root with one child element per field
and the value as text content. No nesting, attributes, or namespaces.
"""

import re
from typing import Dict, Mapping, Optional, Type, TypeVar
from xml.parsers.expat import ExpatError

import xmltodict

from wxpay.errors import ParseError, RequestValidationError
from wxpay.models.results import (
    GatewayResult,
    PaymentNotification,
    PlaceOrderResult,
    QueryOrderResult,
)

ROOT_ELEMENT = "xml"

# Outside the XML 1.0 Char production: C0 controls other than \t \n \r,
# lone surrogates, U+FFFE and U+FFFF.
_ILLEGAL_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

R = TypeVar("R", bound=GatewayResult)


def find_illegal_xml_char(value: str) -> Optional[str]:
    """First character that cannot appear in an XML 1.0 document, if any."""
    match = _ILLEGAL_XML_CHARS.search(value)
    return match.group() if match else None


def to_xml_string(params: Mapping[str, str]) -> str:
    """
    Render a parameter map; text values are XML-escaped.

    Carriage returns are written as &#13; because a parser folds a literal
    \\r into \\n, which would change the value the receiver signs.

    Raises:
        RequestValidationError: A value holds a character XML cannot carry.
    """
    for key, value in params.items():
        bad = find_illegal_xml_char(value)
        if bad is not None:
            raise RequestValidationError(f"field {key!r} contains illegal XML character {bad!r}")

    document = xmltodict.unparse({ROOT_ELEMENT: dict(params)}, full_document=False)
    # keys are plain names and output is not pretty-printed: every \r is value text
    return document.replace("\r", "&#13;")


def parse_params(data: bytes) -> Dict[str, str]:
    """
    Parse a gateway XML document into a flat parameter map.

    Empty elements map to "". Whitespace inside values is kept. Attributes
    and stray text on the root element are ignored.

    Raises:
        ParseError: Not well-formed XML, or not a flat document.
    """
    try:
        document = xmltodict.parse(data, strip_whitespace=False)
    except ExpatError as e:
        raise ParseError(f"malformed XML response: {e}") from e

    if not document:
        raise ParseError("empty XML response")

    root_name, root = next(iter(document.items()))
    if root is None:
        return {}
    if not isinstance(root, dict):
        raise ParseError(f"root element <{root_name}> has no child elements")

    params: Dict[str, str] = {}
    for key, value in root.items():
        if key.startswith("@") or key == "#text":
            continue
        if value is None:
            params[key] = ""
        elif isinstance(value, str):
            params[key] = value
        elif isinstance(value, list):
            raise ParseError(f"element <{key}> is repeated")
        else:
            raise ParseError(f"element <{key}> is not a plain text field")
    return params


def _parse_result(data: bytes, result_type: Type[R]) -> R:
    return result_type.from_map(parse_params(data))


def parse_place_order_result(data: bytes) -> PlaceOrderResult:
    return _parse_result(data, PlaceOrderResult)


def parse_query_order_result(data: bytes) -> QueryOrderResult:
    return _parse_result(data, QueryOrderResult)


def parse_payment_notification(data: bytes) -> PaymentNotification:
    return _parse_result(data, PaymentNotification)
