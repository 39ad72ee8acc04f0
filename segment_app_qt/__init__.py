"""
Segment Overlay Annotation Application (PyQt6).

Interactive overlay for point- and box-based segmentation annotation on
top of a still image, showing precomputed masks.
Features:
- Click mode: foreground/background points
- Box mode: drag a box from an anchor point
- Everything mode: browse masks without annotating
- Per-mask colors, mask area threshold filter

Usage:
    python -m segment_app_qt --image image.jpg --masks masks.json --mode box

Controls:
    - Left click: Add foreground point (click mode)
    - Right click: Add background point (click mode)
    - Drag: Draw box (box mode)
    - Hold Ctrl: Hide mask overlay
    - Escape: Clear points
"""

__version__ = "1.0.0"
