"""
Camera Controller — fit, clamp, zoom and pan over a positioned node set.

The camera is a graph-space center point plus a ``ratio`` (graph units
per pixel, i.e. inverse zoom).  Geometry comes from the most recent
``fit_to_viewport`` call; ``clamp`` must run after every layout pass and
is idempotent, so running it again never moves the camera.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from src.shared.models import Node

logger = logging.getLogger("engine.camera")

# Half-size of the box synthesized around a zero-extent axis
SINGLE_NODE_PADDING = 1.0


@dataclass(frozen=True)
class Camera:
    x: float = 0.0
    y: float = 0.0
    ratio: float = 1.0


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    @classmethod
    def around(cls, nodes: Iterable[Node]) -> "BoundingBox | None":
        """Bounding box of positioned nodes, or None when there are none.

        An axis with zero extent (always the case for a single node) is
        padded by ``SINGLE_NODE_PADDING`` on both sides so the box never
        has zero area.
        """
        points = [(n.position.x, n.position.y) for n in nodes if n.position is not None]
        if not points:
            return None
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        if max_x == min_x:
            min_x, max_x = min_x - SINGLE_NODE_PADDING, max_x + SINGLE_NODE_PADDING
        if max_y == min_y:
            min_y, max_y = min_y - SINGLE_NODE_PADDING, max_y + SINGLE_NODE_PADDING
        return cls(min_x, min_y, max_x, max_y)


@dataclass(frozen=True)
class Viewport:
    """Viewport size and padding, in pixels."""

    width: int = 1024
    height: int = 768
    margin: int = 120


def _clamp_axis(value: float, low: float, high: float) -> float:
    # Box narrower than the visible extent: center it instead
    if low > high:
        return (low + high) / 2
    return max(low, min(high, value))


class CameraController:
    """Owns the camera state and the geometry it is clamped against."""

    def __init__(
        self,
        viewport: Viewport | None = None,
        min_ratio: float = 0.2,
        max_ratio: float = 2.5,
    ) -> None:
        if min_ratio <= 0 or min_ratio > max_ratio:
            raise ValueError(f"Invalid ratio bounds: [{min_ratio}, {max_ratio}]")
        self.viewport = viewport or Viewport()
        self.min_ratio = min_ratio
        self.max_ratio = max_ratio
        self._camera = Camera()
        self._bbox: BoundingBox | None = None

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def bbox(self) -> BoundingBox | None:
        return self._bbox

    def clamp_ratio(self, ratio: float) -> float:
        return max(self.min_ratio, min(self.max_ratio, ratio))

    def reset(self) -> None:
        self._camera = Camera(ratio=self.clamp_ratio(1.0))
        self._bbox = None

    # ─── Fit ──────────────────────────────────────────────

    def fit_to_viewport(
        self,
        nodes: Iterable[Node],
        width: int | None = None,
        height: int | None = None,
        margin: int | None = None,
    ) -> Camera:
        """Center on the nodes at the tightest uniform scale that shows them all.

        The resulting ratio is clamped into the configured bounds.  Clamping
        upward (zooming out) keeps the box inside the viewport; if the box
        needs more than ``max_ratio`` the bound wins.  An empty node set
        resets the camera.
        """
        width = self.viewport.width if width is None else width
        height = self.viewport.height if height is None else height
        margin = self.viewport.margin if margin is None else margin

        bbox = BoundingBox.around(nodes)
        if bbox is None:
            self.reset()
            return self._camera

        usable_w = max(width - 2 * margin, 1)
        usable_h = max(height - 2 * margin, 1)
        scale = min(usable_w / bbox.width, usable_h / bbox.height)
        ratio = self.clamp_ratio(1 / scale)

        cx, cy = bbox.center
        self._bbox = bbox
        self._camera = Camera(x=cx, y=cy, ratio=ratio)
        logger.debug(
            "Fitted camera to %.1fx%.1f box: center=(%.2f, %.2f) ratio=%.4f",
            bbox.width, bbox.height, cx, cy, ratio,
        )
        return self._camera

    # ─── Clamp / zoom / pan ───────────────────────────────

    def clamp(self, width: int | None = None, height: int | None = None) -> bool:
        """Pull the camera back inside the allowed range.

        Returns:
            True if the camera state changed.
        """
        if self._bbox is None:
            return False
        width = self.viewport.width if width is None else width
        height = self.viewport.height if height is None else height

        # ratio first so the extents below use the final value
        ratio = self.clamp_ratio(self._camera.ratio)
        half_w = width * ratio / 2
        half_h = height * ratio / 2
        box = self._bbox
        x = _clamp_axis(self._camera.x, box.min_x + half_w, box.max_x - half_w)
        y = _clamp_axis(self._camera.y, box.min_y + half_h, box.max_y - half_h)

        clamped = Camera(x=x, y=y, ratio=ratio)
        if clamped == self._camera:
            return False
        self._camera = clamped
        return True

    def zoom(self, factor: float) -> Camera:
        """Multiply the ratio by ``factor`` (>1 zooms out), then re-clamp."""
        if factor <= 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}")
        ratio = self.clamp_ratio(self._camera.ratio * factor)
        if ratio != self._camera.ratio:
            self._camera = replace(self._camera, ratio=ratio)
            self.clamp()
        return self._camera

    def pan(self, dx: float, dy: float) -> Camera:
        """Move the center by a graph-space delta, then re-clamp."""
        self._camera = replace(self._camera, x=self._camera.x + dx, y=self._camera.y + dy)
        self.clamp()
        return self._camera

    def contains(self, bbox: BoundingBox, tolerance: float = 1e-6) -> bool:
        """Whether ``bbox`` lies inside the viewport minus margin at the current camera."""
        half_w = (self.viewport.width - 2 * self.viewport.margin) * self._camera.ratio / 2
        half_h = (self.viewport.height - 2 * self.viewport.margin) * self._camera.ratio / 2
        return (
            bbox.min_x >= self._camera.x - half_w - tolerance
            and bbox.max_x <= self._camera.x + half_w + tolerance
            and bbox.min_y >= self._camera.y - half_h - tolerance
            and bbox.max_y <= self._camera.y + half_h + tolerance
        )
