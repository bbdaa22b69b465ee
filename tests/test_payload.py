"""
Tests for wire values and overlay payload encoding.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.imagekit.models import PayloadEncoding, TransformationPosition
from services.imagekit.payload import (
    encode_input_path,
    encode_text,
    encode_uri_component,
    safe_b64encode,
    to_wire_value,
)


class TestWireValue:
    """Test value stringification."""

    def test_bool(self):
        assert to_wire_value(True) == "true"
        assert to_wire_value(False) == "false"

    def test_numbers(self):
        assert to_wire_value(300) == "300"
        assert to_wire_value(2.0) == "2"
        assert to_wire_value(0.8) == "0.8"

    def test_enum(self):
        assert to_wire_value(TransformationPosition.PATH) == "path"

    def test_list(self):
        assert to_wire_value(["a", 1, True]) == "a,1,true"


class TestInputPath:
    """Test image, video and subtitle input encoding."""

    def test_simple_path_inline(self):
        assert encode_input_path("/customer_logo/nykaa.png") == "i-customer_logo@@nykaa.png"

    def test_non_simple_path_base64(self):
        result = encode_input_path("/customer_logo/N\u0303ykaa.png")
        assert result == "ie-Y3VzdG9tZXJfbG9nby9OzIN5a2FhLnBuZw%3D%3D"

    def test_forced_plain(self):
        assert encode_input_path("customer/logo.png", PayloadEncoding.PLAIN) == "i-customer@@logo.png"

    def test_forced_base64(self):
        expected = "ie-" + encode_uri_component(safe_b64encode("path/to/video.mp4"))
        assert encode_input_path("path/to/video.mp4", "base64") == expected

    def test_only_one_slash_stripped(self):
        assert encode_input_path("//a.png/") == "i-@@a.png"


class TestText:
    """Test text overlay encoding."""

    @pytest.mark.parametrize("text,expected", [
        ("Manu", "i-Manu"),
        ("Minimal Text", "i-Minimal%20Text"),
        ("alnum123-._ ", "i-alnum123-._%20"),
    ])
    def test_simple_text_inline(self, text, expected):
        assert encode_text(text) == expected

    def test_non_simple_text_base64(self):
        assert encode_text("Let's use ©, ®, ™, etc") == "ie-TGV0J3MgdXNlIMKpLCDCriwg4oSiLCBldGM%3D"

    def test_slash_not_simple_in_text(self):
        assert encode_text("a/b").startswith("ie-")

    def test_forced_base64(self):
        assert encode_text("HelloWorld", "base64") == "ie-" + encode_uri_component(safe_b64encode("HelloWorld"))

    def test_forced_plain_still_percent_encodes(self):
        assert encode_text("a&b", "plain") == "i-a%26b"


def test_encode_uri_component_matches_browser():
    """Unreserved marks stay literal like encodeURIComponent."""
    assert encode_uri_component("a b/c?d=e&f") == "a%20b%2Fc%3Fd%3De%26f"
    assert encode_uri_component("!*'()-._~") == "!*'()-._~"
