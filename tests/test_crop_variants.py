"""
Tests for crop variant resolution and crop geometry.
"""

import json

import pytest

from image_on_demand.entities import CropArea, CropBox
from image_on_demand.exceptions import CropResolutionError
from image_on_demand.services import parse_crop_variants, resolve_crop_area

VARIANTS = {
    "default": {"cropArea": {"x": 0.25, "y": 0.1, "width": 0.5, "height": 0.8}},
    "empty": {"cropArea": {"x": 0, "y": 0, "width": 0, "height": 0}},
}


@pytest.mark.parametrize("crop", [None, "", {}])
def test_no_configuration_means_no_crop(crop):
    assert parse_crop_variants(crop) == {}
    assert resolve_crop_area(crop, "default").is_empty


def test_variant_from_mapping():
    area = resolve_crop_area(VARIANTS, "default")
    assert area == CropArea(x=0.25, y=0.1, width=0.5, height=0.8)
    assert not area.is_empty


def test_variant_from_json_string():
    assert resolve_crop_area(json.dumps(VARIANTS), "default") == CropArea(x=0.25, y=0.1, width=0.5, height=0.8)


def test_unknown_variant_is_empty():
    assert resolve_crop_area(VARIANTS, "portrait").is_empty


def test_zero_sized_area_is_empty():
    assert resolve_crop_area(VARIANTS, "empty").is_empty


def test_variant_without_crop_area_is_empty():
    assert resolve_crop_area({"default": {"selectedRatio": "1:1"}}, "default").is_empty


@pytest.mark.parametrize(
    "crop",
    [
        "{not json",
        "[1, 2]",
        {"default": {"cropArea": {"x": "left", "y": 0, "width": 1, "height": 1}}},
        {"default": {"cropArea": {"x": 0, "y": 0, "width": 1.5, "height": 1}}},
        {"default": {"cropArea": "everything"}},
    ],
)
def test_malformed_configuration_raises(crop):
    with pytest.raises(CropResolutionError):
        resolve_crop_area(crop, "default")


def test_make_absolute():
    box = CropArea(x=0.25, y=0.1, width=0.5, height=0.8).make_absolute(800, 600)
    assert box == CropBox(left=200, top=60, width=400, height=480)
    assert box.as_box() == (200, 60, 600, 540)


def test_make_absolute_stays_inside_image():
    box = CropArea(x=0.9, y=0.9, width=0.5, height=0.5).make_absolute(100, 100)
    left, top, right, bottom = box.as_box()
    assert right <= 100
    assert bottom <= 100
