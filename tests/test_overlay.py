"""
Tests for overlay layer encoding.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.imagekit.models import (
    ImageOverlay,
    OverlayPosition,
    OverlayTiming,
    SolidColorOverlay,
    SubtitleOverlay,
    TextOverlay,
    VideoOverlay,
)
from services.imagekit.overlay import build_overlay_string
from services.imagekit.transformation import build_transformation_string


class TestOverlayVariants:
    """Test each overlay type on its own."""

    def test_text(self):
        assert build_overlay_string(TextOverlay(text="Minimal Text")) == "l-text,i-Minimal%20Text,l-end"

    def test_image(self):
        assert build_overlay_string(ImageOverlay(input="logo.png")) == "l-image,i-logo.png,l-end"

    def test_video(self):
        result = build_overlay_string(VideoOverlay(input="play-pause-loop.mp4"))
        assert result == "l-video,i-play-pause-loop.mp4,l-end"

    def test_subtitle(self):
        assert build_overlay_string(SubtitleOverlay(input="subtitle.srt")) == "l-subtitle,i-subtitle.srt,l-end"

    def test_solid_color(self):
        result = build_overlay_string(SolidColorOverlay(color="FF0000"))
        assert result == "l-image,i-ik_canvas,bg-FF0000,l-end"

    def test_dict_input(self):
        result = build_overlay_string({"type": "image", "input": "/customer_logo/nykaa.png"})
        assert result == "l-image,i-customer_logo@@nykaa.png,l-end"

    def test_numeric_payloads(self):
        """Numbers given as text, input or color are written as their digits."""
        assert build_transformation_string([{"overlay": {"type": "text", "text": 123}}]) == "l-text,i-123,l-end"
        assert build_overlay_string({"type": "image", "input": 42}) == "l-image,i-42,l-end"
        assert build_overlay_string({"type": "solidColor", "color": 111}) == "l-image,i-ik_canvas,bg-111,l-end"

    def test_nested_none_step_skipped(self):
        overlay = {"type": "image", "input": "logo.png", "transformation": [None, {"width": 100}]}
        assert build_overlay_string(overlay) == "l-image,i-logo.png,w-100,l-end"

    def test_position_and_timing(self):
        overlay = ImageOverlay(
            input="logo.png",
            position=OverlayPosition(x="10", y=20, focus="center"),
            timing=OverlayTiming(start=5, end=15, duration="10"),
        )
        result = build_overlay_string(overlay)
        assert result == "l-image,i-logo.png,lx-10,ly-20,lfo-center,lso-5,leo-15,ldu-10,l-end"

    def test_zero_position_is_omitted(self):
        overlay = ImageOverlay(input="logo.png", position=OverlayPosition(x=0, y=5))
        assert build_overlay_string(overlay) == "l-image,i-logo.png,ly-5,l-end"

    def test_nested_transformation(self):
        overlay = ImageOverlay(input="logo.png", transformation=[{"width": 100}, {"rotation": 90}])
        assert build_overlay_string(overlay) == "l-image,i-logo.png,w-100:rt-90,l-end"


class TestDroppedOverlays:
    """Test that incomplete overlays produce nothing."""

    @pytest.mark.parametrize("overlay_type", ["text", "image", "video", "subtitle", "solidColor"])
    def test_missing_required_field(self, overlay_type):
        assert build_overlay_string({"type": overlay_type}) is None
        url_string = build_transformation_string([{"overlay": {"type": overlay_type}}])
        assert url_string == ""

    def test_empty_required_field(self):
        assert build_overlay_string(TextOverlay(text="")) is None
        assert build_overlay_string(ImageOverlay(input="")) is None

    def test_unknown_type(self):
        assert build_overlay_string({"type": "audio", "input": "a.mp3"}) is None

    def test_missing_type(self):
        assert build_overlay_string({"input": "a.png"}) is None

    def test_dropped_overlay_keeps_siblings(self):
        result = build_transformation_string([{"width": 100, "overlay": {"type": "image"}}])
        assert result == "w-100"


class TestNesting:
    """Test overlays inside overlay transformations."""

    def test_layers_balance(self):
        overlay = ImageOverlay(
            input="logo.png",
            transformation=[{
                "width": "bw_mul_0.5",
                "overlay": {
                    "type": "image",
                    "input": "badge.png",
                    "transformation": [{"overlay": {"type": "text", "text": "deep"}}],
                },
            }],
        )
        result = build_overlay_string(overlay)

        tokens = result.replace(":", ",").split(",")
        opens = [t for t in tokens if t.startswith("l-") and t != "l-end"]
        assert len(opens) == tokens.count("l-end") == 3
        assert result.endswith("l-end,l-end,l-end")

    def test_idempotent(self):
        overlay = TextOverlay(text="Every thing", position=OverlayPosition(x=10), transformation=[{"fontSize": 20}])
        assert build_overlay_string(overlay) == build_overlay_string(overlay)

    def test_depth_bound(self, monkeypatch):
        from config import settings
        monkeypatch.setattr(settings, "MAX_TRANSFORMATION_DEPTH", 2)

        inner = {"type": "text", "text": "c"}
        middle = {"type": "text", "text": "b", "transformation": [{"overlay": inner}]}
        outer = {"type": "text", "text": "a", "transformation": [{"overlay": middle}]}

        result = build_transformation_string([{"overlay": outer}])
        assert result == "l-text,i-a,l-text,i-b,l-end,l-end"


def test_combined_overlays():
    """Text, image with nested text, video, subtitle and solid color layers chained."""
    position = {"x": "10", "y": "20", "focus": "center"}
    timing = {"start": 5, "duration": "10", "end": 15}
    resize = {"width": "bw_mul_0.5", "height": "bh_mul_0.5", "rotation": "N45", "flip": "h"}

    result = build_transformation_string([
        {"overlay": {
            "type": "text",
            "text": "Every thing",
            "position": position,
            "timing": timing,
            "transformation": [{
                "width": "bw_mul_0.5",
                "fontSize": 20,
                "fontFamily": "Arial",
                "fontColor": "0000ff",
                "innerAlignment": "left",
                "padding": 5,
                "alpha": 7,
                "typography": "b",
                "background": "red",
                "radius": 10,
                "rotation": "N45",
                "flip": "h",
                "lineHeight": 20,
            }],
        }},
        {"overlay": {
            "type": "image",
            "input": "logo.png",
            "position": position,
            "timing": timing,
            "transformation": [{**resize, "overlay": {"type": "text", "text": "Nested text overlay"}}],
        }},
        {"overlay": {"type": "video", "input": "play-pause-loop.mp4", "position": position, "timing": timing}},
        {"overlay": {"type": "subtitle", "input": "subtitle.srt", "position": position, "timing": timing}},
        {"overlay": {
            "type": "solidColor",
            "color": "FF0000",
            "position": position,
            "timing": timing,
            "transformation": [resize],
        }},
    ])

    layout = "lx-10,ly-20,lfo-center,lso-5,leo-15,ldu-10"
    assert result == (
        f"l-text,i-Every%20thing,{layout},w-bw_mul_0.5,fs-20,ff-Arial,co-0000ff,ia-left,pa-5,al-7,"
        f"tg-b,bg-red,r-10,rt-N45,fl-h,lh-20,l-end"
        f":l-image,i-logo.png,{layout},w-bw_mul_0.5,h-bh_mul_0.5,rt-N45,fl-h,"
        f"l-text,i-Nested%20text%20overlay,l-end,l-end"
        f":l-video,i-play-pause-loop.mp4,{layout},l-end"
        f":l-subtitle,i-subtitle.srt,{layout},l-end"
        f":l-image,i-ik_canvas,bg-FF0000,{layout},w-bw_mul_0.5,h-bh_mul_0.5,rt-N45,fl-h,l-end"
    )
