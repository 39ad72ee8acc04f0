"""
Mask record loading.

Builds Mask records from the JSON produced by a mask generator, or from
binary mask images and arrays.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import cv2
import numpy as np

from segment_app_qt.state.annotation_state import Mask
from segment_app_qt.utils.exceptions import MaskFormatError
from segment_app_qt.utils.logger import get_logger

logger = get_logger(__name__)


def load_masks_json(path: Union[str, Path]) -> List[Mask]:
    """
    Load mask records from a JSON file.

    The file holds either a list of records or an object with a "masks"
    list. Each record has "bbox" ([x, y, w, h]), "segmentation" (one list
    of occupied column indices per image row) and optionally "area".

    Args:
        path: Path to the JSON file

    Returns:
        Masks in file order

    Raises:
        MaskFormatError: If the file cannot be parsed or a record is invalid
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MaskFormatError(f"Failed to read masks file: {e}", source=str(path))

    if isinstance(data, dict):
        data = data.get("masks")
    if not isinstance(data, list):
        raise MaskFormatError(
            "Masks file must contain a list of mask records", source=str(path)
        )

    masks = masks_from_records(data, source=str(path))
    logger.info(f"Loaded {len(masks)} masks from {path}")
    return masks


def load_mask_images(directory: Union[str, Path]) -> List[Mask]:
    """
    Load masks from a directory of binary mask images.

    Every PNG in the directory is one mask; non-zero pixels belong to the
    mask. Files are taken in name order, which fixes their colors.

    Raises:
        MaskFormatError: If the directory is missing or an image is unreadable
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise MaskFormatError("Mask directory not found", source=str(directory))

    masks = []
    for index, image_path in enumerate(sorted(directory.glob("*.png"))):
        binary = cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
        if binary is None:
            raise MaskFormatError(
                "Failed to read mask image", source=str(image_path), index=index
            )
        masks.append(mask_from_binary(binary))

    logger.info(f"Loaded {len(masks)} masks from {directory}")
    return masks


def load_masks(path: Union[str, Path]) -> List[Mask]:
    """Load masks from a JSON file or a directory of mask images."""
    path = Path(path)
    if path.is_dir():
        return load_mask_images(path)
    return load_masks_json(path)


def masks_from_records(
    records: Sequence[Dict[str, Any]], source: Optional[str] = None
) -> List[Mask]:
    """Convert a sequence of record dicts into Masks."""
    return [
        mask_from_record(record, index=i, source=source)
        for i, record in enumerate(records)
    ]


def mask_from_record(
    record: Dict[str, Any],
    index: Optional[int] = None,
    source: Optional[str] = None,
) -> Mask:
    """
    Convert one record dict into a Mask.

    A missing "area" is taken as the number of occupied columns.

    Raises:
        MaskFormatError: If bbox or segmentation is missing or malformed
    """
    if not isinstance(record, dict):
        raise MaskFormatError("Mask record must be an object", source, index)

    bbox = record.get("bbox")
    if not isinstance(bbox, (list, tuple)) or len(bbox) != 4:
        raise MaskFormatError("bbox must be [x, y, w, h]", source, index)

    rows = record.get("segmentation")
    if not isinstance(rows, (list, tuple)):
        raise MaskFormatError("segmentation must be a list of rows", source, index)

    area = record.get("area")
    try:
        segmentation = tuple(tuple(int(c) for c in row) for row in rows)
        bbox_values = tuple(float(v) for v in bbox)
        if area is None:
            area = sum(len(row) for row in segmentation)
        area = float(area)
    except (TypeError, ValueError) as e:
        raise MaskFormatError(f"Invalid mask values: {e}", source, index)

    return Mask(bbox=bbox_values, segmentation=segmentation, area=area)


def mask_from_binary(mask: np.ndarray) -> Mask:
    """
    Convert a boolean mask array into a row-encoded Mask.

    Args:
        mask: Boolean or binary mask array (H, W)

    Returns:
        Mask with its tight bounding box, per-row columns and pixel area
    """
    mask_bool = np.asarray(mask).astype(bool)
    segmentation = tuple(
        tuple(int(c) for c in np.flatnonzero(row)) for row in mask_bool
    )
    area = float(np.count_nonzero(mask_bool))

    if area == 0:
        return Mask(bbox=(0.0, 0.0, 0.0, 0.0), segmentation=segmentation, area=0.0)

    rows = np.any(mask_bool, axis=1)
    cols = np.any(mask_bool, axis=0)
    y1, y2 = np.where(rows)[0][[0, -1]]
    x1, x2 = np.where(cols)[0][[0, -1]]
    bbox = (float(x1), float(y1), float(x2 - x1 + 1), float(y2 - y1 + 1))
    return Mask(bbox=bbox, segmentation=segmentation, area=area)
