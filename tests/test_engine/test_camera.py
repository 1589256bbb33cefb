"""
Unit tests for CameraController fit, clamp, zoom and pan.
"""

import pytest

from src.engine.camera import (
    SINGLE_NODE_PADDING,
    BoundingBox,
    Camera,
    CameraController,
    Viewport,
)
from src.engine.star_builder import StarSubgraphBuilder
from src.shared.models import Node


def _nodes(*points: tuple[float, float]) -> list[Node]:
    return [Node(f"n{i}").at(x, y) for i, (x, y) in enumerate(points)]


@pytest.fixture
def controller() -> CameraController:
    return CameraController(Viewport(1024, 768, 120), min_ratio=0.2, max_ratio=2.5)


# ─── Bounding box ────────────────────────────────────────────


class TestBoundingBox:
    def test_empty(self):
        assert BoundingBox.around([]) is None

    def test_unpositioned_nodes_ignored(self):
        assert BoundingBox.around([Node("a")]) is None

    def test_single_node_padded(self):
        box = BoundingBox.around(_nodes((5, 7)))
        assert box == BoundingBox(
            5 - SINGLE_NODE_PADDING, 7 - SINGLE_NODE_PADDING,
            5 + SINGLE_NODE_PADDING, 7 + SINGLE_NODE_PADDING,
        )

    def test_flat_axis_padded(self):
        box = BoundingBox.around(_nodes((0, 0), (100, 0)))
        assert box.width == 100
        assert box.height == 2 * SINGLE_NODE_PADDING
        assert box.center == (50, 0)


# ─── Construction ────────────────────────────────────────────


class TestConstruction:
    @pytest.mark.parametrize("low, high", [(0, 1), (-1, 1), (3, 2)])
    def test_invalid_bounds(self, low, high):
        with pytest.raises(ValueError):
            CameraController(min_ratio=low, max_ratio=high)

    def test_initial_camera(self, controller):
        assert controller.camera == Camera(0.0, 0.0, 1.0)
        assert controller.bbox is None
        assert controller.clamp() is False


# ─── Fit ─────────────────────────────────────────────────────


class TestFit:
    def test_fit_centers_on_box(self, controller):
        camera = controller.fit_to_viewport(_nodes((0, 0), (400, 200)))
        assert (camera.x, camera.y) == (200, 100)

    def test_fit_uses_tightest_axis(self, controller):
        # usable area 784 x 528; box 784 x 264 -> width limits, scale 1
        camera = controller.fit_to_viewport(_nodes((0, 0), (784, 264)))
        assert camera.ratio == pytest.approx(1.0)

    def test_fit_contains_box(self, controller):
        nodes = _nodes((-300, -40), (300, 40), (10, 10))
        controller.fit_to_viewport(nodes)
        assert controller.contains(BoundingBox.around(nodes))

    def test_fit_star_contains_all_nodes(self, controller, abc_store):
        star = StarSubgraphBuilder(abc_store).build("A")
        controller.fit_to_viewport(star.nodes)
        assert controller.min_ratio <= controller.camera.ratio <= controller.max_ratio
        assert controller.contains(BoundingBox.around(star.nodes))

    def test_single_node_clamped_to_min_ratio(self, controller):
        camera = controller.fit_to_viewport(_nodes((0, 0)))
        assert camera.ratio == controller.min_ratio

    def test_huge_box_clamped_to_max_ratio(self, controller):
        camera = controller.fit_to_viewport(_nodes((0, 0), (100_000, 100_000)))
        assert camera.ratio == controller.max_ratio

    def test_empty_fit_resets(self, controller):
        controller.fit_to_viewport(_nodes((0, 0), (400, 200)))
        camera = controller.fit_to_viewport([])
        assert camera == Camera(0.0, 0.0, 1.0)
        assert controller.bbox is None

    def test_explicit_dimensions_override_viewport(self, controller):
        camera = controller.fit_to_viewport(_nodes((0, 0), (100, 100)), width=300, height=300, margin=50)
        assert camera.ratio == pytest.approx(0.5)


# ─── Clamp ───────────────────────────────────────────────────


class TestClamp:
    def test_clamp_is_idempotent(self, controller):
        controller.fit_to_viewport(_nodes((0, 0), (5000, 100)))
        controller.pan(10_000, -10_000)
        first = controller.camera
        assert controller.clamp() is False
        assert controller.camera == first

    def test_clamp_pulls_camera_back(self, controller):
        controller.fit_to_viewport(_nodes((0, 0), (100_000, 0)))
        controller.pan(1_000_000, 0)
        box = controller.bbox
        half_w = controller.viewport.width * controller.camera.ratio / 2
        assert controller.camera.x == pytest.approx(box.max_x - half_w)

    def test_small_box_keeps_center(self, controller):
        controller.fit_to_viewport(_nodes((0, 0), (100, 100)))
        controller.pan(500, 500)
        assert controller.camera.x == pytest.approx(50)
        assert controller.camera.y == pytest.approx(50)


# ─── Zoom / pan ──────────────────────────────────────────────


class TestZoom:
    @pytest.mark.parametrize("factor", [0.5, 0.01, 2.0, 100.0])
    def test_ratio_stays_in_bounds(self, controller, factor):
        controller.fit_to_viewport(_nodes((0, 0), (400, 200)))
        for _ in range(10):
            controller.zoom(factor)
            assert controller.min_ratio <= controller.camera.ratio <= controller.max_ratio

    def test_zoom_in_hits_min_ratio(self, controller):
        controller.fit_to_viewport(_nodes((0, 0), (400, 200)))
        controller.zoom(0.001)
        assert controller.camera.ratio == controller.min_ratio

    def test_zoom_out_hits_max_ratio(self, controller):
        controller.fit_to_viewport(_nodes((0, 0), (400, 200)))
        controller.zoom(1000)
        assert controller.camera.ratio == controller.max_ratio

    @pytest.mark.parametrize("factor", [0, -1.5])
    def test_non_positive_factor_rejected(self, controller, factor):
        with pytest.raises(ValueError):
            controller.zoom(factor)

    def test_pan_without_geometry_moves_freely(self, controller):
        camera = controller.pan(10, -5)
        assert (camera.x, camera.y) == (10, -5)
