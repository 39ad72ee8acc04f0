"""
Tests for mask record loading.
"""

import json

import cv2
import numpy as np
import pytest

from segment_app_qt.state import Mask
from segment_app_qt.utils.exceptions import MaskFormatError
from segment_app_qt.utils.mask_io import (
    load_mask_images,
    load_masks,
    load_masks_json,
    mask_from_binary,
    mask_from_record,
    masks_from_records,
)


class TestMaskFromRecord:
    """Test mask_from_record function."""

    def test_basic_record(self, mask_records):
        """Test fields are converted to tuples and floats."""
        mask = mask_from_record(mask_records[0])

        assert mask == Mask(
            bbox=(1.0, 0.0, 3.0, 2.0), segmentation=((1, 2, 3), (2,)), area=4.0
        )

    def test_missing_area_counts_columns(self, mask_records):
        """Test a missing area is the number of occupied columns."""
        assert mask_from_record(mask_records[1]).area == 2.0

    def test_missing_bbox(self):
        """Test records without bbox are rejected."""
        with pytest.raises(MaskFormatError) as exc_info:
            mask_from_record({"segmentation": []}, index=3)

        assert exc_info.value.index == 3

    def test_bad_bbox_length(self):
        """Test bbox must have four values."""
        with pytest.raises(MaskFormatError):
            mask_from_record({"bbox": [0, 0, 1], "segmentation": []})

    def test_bad_segmentation(self):
        """Test segmentation must be a list of rows."""
        with pytest.raises(MaskFormatError):
            mask_from_record({"bbox": [0, 0, 1, 1], "segmentation": "rows"})

    def test_non_numeric_columns(self):
        """Test non-numeric columns are rejected."""
        with pytest.raises(MaskFormatError):
            mask_from_record({"bbox": [0, 0, 1, 1], "segmentation": [["a"]]})

    def test_non_numeric_area(self):
        """Test a non-numeric area is rejected."""
        with pytest.raises(MaskFormatError) as exc_info:
            mask_from_record(
                {"bbox": [0, 0, 1, 1], "segmentation": [[0]], "area": "abc"}, index=1
            )

        assert exc_info.value.index == 1

    def test_not_a_dict(self):
        """Test non-object records are rejected."""
        with pytest.raises(MaskFormatError):
            mask_from_record([1, 2, 3])


class TestMasksFromRecords:
    """Test masks_from_records function."""

    def test_preserves_order(self, mask_records):
        """Test masks keep file order (which fixes their colors)."""
        masks = masks_from_records(mask_records)

        assert [m.bbox for m in masks] == [(1.0, 0.0, 3.0, 2.0), (0.0, 0.0, 2.0, 1.0)]

    def test_empty(self):
        """Test an empty list is valid."""
        assert masks_from_records([]) == []

    def test_error_reports_index(self, mask_records):
        """Test the failing record index is reported."""
        with pytest.raises(MaskFormatError) as exc_info:
            masks_from_records(mask_records + [{}], source="m.json")

        assert exc_info.value.index == 2
        assert exc_info.value.details["source"] == "m.json"


class TestLoadMasksJson:
    """Test load_masks_json function."""

    def test_list_file(self, tmp_path, mask_records):
        """Test a file holding a list of records."""
        path = tmp_path / "masks.json"
        path.write_text(json.dumps(mask_records))

        assert len(load_masks_json(path)) == 2

    def test_object_file(self, tmp_path, mask_records):
        """Test a file holding {"masks": [...]}."""
        path = tmp_path / "masks.json"
        path.write_text(json.dumps({"masks": mask_records}))

        assert len(load_masks_json(str(path))) == 2

    def test_invalid_json(self, tmp_path):
        """Test unparsable files raise MaskFormatError."""
        path = tmp_path / "masks.json"
        path.write_text("{not json")

        with pytest.raises(MaskFormatError):
            load_masks_json(path)

    def test_missing_file(self, tmp_path):
        """Test missing files raise MaskFormatError."""
        with pytest.raises(MaskFormatError):
            load_masks_json(tmp_path / "missing.json")

    def test_wrong_top_level(self, tmp_path):
        """Test non-list content is rejected."""
        path = tmp_path / "masks.json"
        path.write_text(json.dumps({"items": []}))

        with pytest.raises(MaskFormatError):
            load_masks_json(path)


class TestMaskFromBinary:
    """Test mask_from_binary function."""

    def test_block_mask(self):
        """Test bbox, rows and area of a rectangular mask."""
        binary = np.zeros((5, 6), dtype=bool)
        binary[1:3, 2:5] = True

        mask = mask_from_binary(binary)

        assert mask.bbox == (2.0, 1.0, 3.0, 2.0)
        assert mask.area == 6.0
        assert mask.segmentation == ((), (2, 3, 4), (2, 3, 4), (), ())

    def test_empty_mask(self):
        """Test an all-false mask has zero area and bbox."""
        mask = mask_from_binary(np.zeros((3, 3), dtype=np.uint8))

        assert mask.area == 0.0
        assert mask.bbox == (0.0, 0.0, 0.0, 0.0)
        assert mask.segmentation == ((), (), ())

    def test_sample_mask(self, small_mask):
        """Test conversion matches a hand-written record."""
        binary = np.zeros((40, 40), dtype=bool)
        binary[10:12, 10:13] = True

        assert mask_from_binary(binary) == small_mask


class TestLoadMaskImages:
    """Test load_mask_images and load_masks functions."""

    @pytest.fixture
    def mask_dir(self, tmp_path):
        first = np.zeros((40, 40), dtype=np.uint8)
        first[10:12, 10:13] = 255
        second = np.zeros((40, 40), dtype=np.uint8)
        second[0, 0:2] = 255
        cv2.imwrite(str(tmp_path / "b.png"), second)
        cv2.imwrite(str(tmp_path / "a.png"), first)
        return tmp_path

    def test_name_order(self, mask_dir, small_mask):
        """Test images are loaded in file name order."""
        masks = load_mask_images(mask_dir)

        assert masks[0] == small_mask
        assert masks[1].bbox == (0.0, 0.0, 2.0, 1.0)
        assert masks[1].area == 2.0

    def test_missing_directory(self, tmp_path):
        """Test a missing directory raises MaskFormatError."""
        with pytest.raises(MaskFormatError):
            load_mask_images(tmp_path / "missing")

    def test_unreadable_image(self, tmp_path):
        """Test a corrupt PNG raises MaskFormatError."""
        (tmp_path / "broken.png").write_bytes(b"not a png")

        with pytest.raises(MaskFormatError):
            load_mask_images(tmp_path)

    def test_load_masks_dispatch(self, mask_dir, tmp_path_factory, mask_records):
        """Test load_masks picks the loader from the path type."""
        json_path = tmp_path_factory.mktemp("json") / "masks.json"
        json_path.write_text(json.dumps(mask_records))

        assert len(load_masks(mask_dir)) == 2
        assert len(load_masks(json_path)) == 2
