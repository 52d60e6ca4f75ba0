"""Tests for the XML wire format."""

import pytest

from wxpay.codec.xml_codec import (
    parse_params,
    parse_payment_notification,
    parse_place_order_result,
    parse_query_order_result,
    to_xml_string,
)
from wxpay.errors import ParseError, RequestValidationError


class TestToXmlString:
    def test_flat_document_under_xml_root(self):
        assert to_xml_string({"appid": "wx123", "body": "test"}) == (
            "<xml><appid>wx123</appid><body>test</body></xml>"
        )

    def test_special_characters_escaped(self):
        document = to_xml_string({"body": "a < b & c > d"})
        assert "<body>a &lt; b &amp; c &gt; d</body>" in document

    def test_empty_value_is_empty_element(self):
        assert to_xml_string({"attach": ""}) == "<xml><attach></attach></xml>"

    def test_carriage_return_written_as_character_reference(self):
        assert to_xml_string({"detail": "a\r\nb"}) == "<xml><detail>a&#13;\nb</detail></xml>"

    @pytest.mark.parametrize("value", ["\x00", "nul\x01", "\x0b", "\x0c", "esc\x1b", "\x1f", "\ufffe", "\uffff"])
    def test_illegal_xml_character_rejected(self, value):
        with pytest.raises(RequestValidationError, match="body"):
            to_xml_string({"body": value})


class TestParseParams:
    def test_flat_document(self):
        params = parse_params(b"<xml><return_code>SUCCESS</return_code><appid>wx1</appid></xml>")
        assert params == {"return_code": "SUCCESS", "appid": "wx1"}

    def test_cdata_values(self):
        body = b"<xml><return_code><![CDATA[SUCCESS]]></return_code><return_msg><![CDATA[OK]]></return_msg></xml>"
        assert parse_params(body) == {"return_code": "SUCCESS", "return_msg": "OK"}

    def test_pretty_printed_document(self):
        body = b"<xml>\n  <return_code>SUCCESS</return_code>\n  <appid>wx1</appid>\n</xml>\n"
        assert parse_params(body) == {"return_code": "SUCCESS", "appid": "wx1"}

    def test_empty_elements_become_empty_string(self):
        assert parse_params(b"<xml><attach/><detail></detail></xml>") == {"attach": "", "detail": ""}

    def test_whitespace_inside_value_kept(self):
        assert parse_params(b"<xml><body>  padded  </body></xml>") == {"body": "  padded  "}

    def test_root_attributes_ignored(self):
        assert parse_params(b'<xml version="1"><a>1</a></xml>') == {"a": "1"}

    def test_empty_root(self):
        assert parse_params(b"<xml/>") == {}

    def test_utf8_values(self):
        body = "<xml><body>腾讯充值</body></xml>".encode("utf-8")
        assert parse_params(body) == {"body": "腾讯充值"}

    def test_malformed(self):
        with pytest.raises(ParseError):
            parse_params(b"<xml><a>1</xml>")

    def test_not_xml(self):
        with pytest.raises(ParseError):
            parse_params(b"<html>502 Bad Gateway")

    def test_empty_body(self):
        with pytest.raises(ParseError):
            parse_params(b"")

    def test_nested_element_rejected(self):
        with pytest.raises(ParseError):
            parse_params(b"<xml><a><b>1</b></a></xml>")

    def test_repeated_element_rejected(self):
        with pytest.raises(ParseError):
            parse_params(b"<xml><a>1</a><a>2</a></xml>")

    def test_text_only_root_rejected(self):
        with pytest.raises(ParseError):
            parse_params(b"<xml>SUCCESS</xml>")

    def test_carriage_return_reference_kept(self):
        assert parse_params(b"<xml><detail>a&#13;\nb</detail></xml>") == {"detail": "a\r\nb"}

    def test_raw_control_character_rejected(self):
        with pytest.raises(ParseError):
            parse_params(b"<xml><body>a\x01b</body></xml>")

    def test_control_character_reference_rejected(self):
        with pytest.raises(ParseError):
            parse_params(b"<xml><body>a&#1;b</body></xml>")


class TestRoundTrip:
    def test_place_order_fields_recovered(self, place_order_success):
        params = dict(place_order_success, sign="ABC")
        result = parse_place_order_result(to_xml_string(params).encode("utf-8"))
        assert result.to_map().items() >= params.items()
        assert result.prepay_id == place_order_success["prepay_id"]

    def test_query_order_fields_recovered(self, query_order_success):
        result = parse_query_order_result(to_xml_string(query_order_success).encode("utf-8"))
        for key, value in query_order_success.items():
            assert getattr(result, key) == value

    def test_special_characters_survive(self):
        params = {"return_code": "SUCCESS", "return_msg": "<ok> & \"fine\" 'yes'", "attach": "a&b"}
        result = parse_query_order_result(to_xml_string(params).encode("utf-8"))
        assert result.return_msg == params["return_msg"]
        assert result.extra == {}
        assert result.attach == "a&b"

    @pytest.mark.parametrize(
        "value",
        [
            "line1\r\nline2",
            "a\rb",
            "\r",
            "\n",
            "\ttab\t",
            "  lead and trail  ",
            "\U0001f600 non-BMP \U0001d11e",
            "a]]>b",
            "<![CDATA[x]]>",
            "&amp; &#13;",
        ],
    )
    def test_value_survives_wire_trip(self, value):
        params = {"return_code": "SUCCESS", "attach": value}
        assert parse_params(to_xml_string(params).encode("utf-8")) == params
        assert parse_query_order_result(to_xml_string(params).encode("utf-8")).attach == value

    def test_undeclared_fields_kept_in_extra(self):
        params = {"return_code": "SUCCESS", "coupon_id_0": "10000", "coupon_fee_0": "100"}
        result = parse_query_order_result(to_xml_string(params).encode("utf-8"))
        assert result.extra == {"coupon_id_0": "10000", "coupon_fee_0": "100"}
        assert result.to_map()["coupon_id_0"] == "10000"


class TestTypedResults:
    def test_missing_return_code(self):
        with pytest.raises(ParseError):
            parse_place_order_result(b"<xml><result_code>SUCCESS</result_code></xml>")

    def test_missing_return_code_query(self):
        with pytest.raises(ParseError):
            parse_query_order_result(b"<xml/>")

    def test_optional_fields_default_to_empty(self):
        result = parse_place_order_result(
            b"<xml><return_code>FAIL</return_code><return_msg>bad sign</return_msg></xml>"
        )
        assert result.return_code == "FAIL"
        assert result.prepay_id == ""
        assert result.sign == ""
        assert result.err_code == ""

    def test_notification(self, query_order_success):
        body = to_xml_string(query_order_success).encode("utf-8")
        notification = parse_payment_notification(body)
        assert notification.transaction_id == query_order_success["transaction_id"]
        # trade_state and trade_state_desc are not notification fields
        assert notification.extra == {"trade_state": "SUCCESS", "trade_state_desc": "paid"}
