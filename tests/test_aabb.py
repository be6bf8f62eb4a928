"""Unit tests for axis-aligned boxes.

Tests cover:
- Validity and the empty-box sentinels (float and integer)
- Closed point containment and box containment
- Union and intersection, including commutativity
- Mixed-precision operands and destinations
- Center, extent, translation and affine transform
- Box-sphere and box-plane tests
- Compile-time rejection of bad component indices
"""

import math

import pytest
import taichi as ti


class TestAABBValidity:
    """Tests for is_valid and sentinels."""

    def test_valid_and_degenerate_box(self):
        """Test min <= max is valid, including zero-size boxes."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        results = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            flat = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 0.0, 1.0))
            inverted = AABBf(min=vec3f(0.0, 2.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            results[0] = box.is_valid()
            results[1] = flat.is_valid()
            results[2] = inverted.is_valid()

        test_kernel()
        assert results[0] == 1
        assert results[1] == 1
        assert results[2] == 0

    def test_float_sentinel(self):
        """Test set_empty writes +inf/-inf and is invalid."""
        from src.primitives.geometry.aabb import AABBf

        lo = ti.field(dtype=ti.math.vec3, shape=())
        hi = ti.field(dtype=ti.math.vec3, shape=())
        valid = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBf()
            box.set_empty()
            lo[None] = box.min
            hi[None] = box.max
            valid[None] = box.is_valid()

        test_kernel()
        assert all(math.isinf(v) and v > 0 for v in lo[None].to_numpy())
        assert all(math.isinf(v) and v < 0 for v in hi[None].to_numpy())
        assert valid[None] == 0

    def test_int_sentinel(self):
        """Test integer boxes use INT_MAX/INT_MIN as sentinel."""
        from src.primitives.core.types import INT_MAX, INT_MIN, vec3i
        from src.primitives.geometry.aabb import AABBi

        lo = ti.field(dtype=vec3i, shape=())
        hi = ti.field(dtype=vec3i, shape=())
        valid = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi()
            box.set_empty()
            lo[None] = box.min
            hi[None] = box.max
            valid[None] = box.is_valid()

        test_kernel()
        assert list(lo[None].to_numpy()) == [INT_MAX, INT_MAX, INT_MAX]
        assert list(hi[None].to_numpy()) == [INT_MIN, INT_MIN, INT_MIN]
        assert valid[None] == 0


class TestAABBContainment:
    """Tests for contains_point, contains_xyz and contains_aabb."""

    def test_contains_point_closed(self):
        """Test points on faces and corners are inside."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        results = ti.field(dtype=ti.i32, shape=5)

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            results[0] = box.contains_point(vec3f(0.5, 0.5, 0.5))
            results[1] = box.contains_point(vec3f(1.0, 0.5, 0.5))
            results[2] = box.contains_point(vec3f(0.0, 0.0, 0.0))
            results[3] = box.contains_point(vec3f(1.1, 0.5, 0.5))
            results[4] = box.contains_xyz(0.5, -0.1, 0.5)

        test_kernel()
        assert results[0] == 1
        assert results[1] == 1
        assert results[2] == 1
        assert results[3] == 0
        assert results[4] == 0

    def test_integer_box_contains_float_point(self):
        """Test an integer box compares in float against a float point."""
        from src.primitives.core.types import vec3d, vec3i
        from src.primitives.geometry.aabb import AABBi

        results = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            box = AABBi(min=vec3i(0, 0, 0), max=vec3i(1, 1, 1))
            results[0] = box.contains_point(vec3d(0.999, 0.5, 0.5))
            results[1] = box.contains_point(vec3d(1.001, 0.5, 0.5))

        test_kernel()
        assert results[0] == 1
        assert results[1] == 0

    def test_contains_self(self):
        """Test every valid box contains itself."""
        from src.primitives.core.types import vec3d, vec3f, vec3i
        from src.primitives.geometry.aabb import AABBd, AABBf, AABBi

        results = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            a = AABBf(min=vec3f(-1.0, 2.0, 0.5), max=vec3f(3.0, 2.5, 9.0))
            b = AABBd(min=vec3d(-1.0, -1.0, -1.0), max=vec3d(1.0, 1.0, 1.0))
            c = AABBi(min=vec3i(-5, 0, 5), max=vec3i(5, 0, 6))
            results[0] = a.contains_aabb(a)
            results[1] = b.contains_aabb(b)
            results[2] = c.contains_aabb(c)

        test_kernel()
        assert results[0] == 1
        assert results[1] == 1
        assert results[2] == 1

    def test_contains_aabb_across_precisions(self):
        """Test an integer box containing a float box and vice versa."""
        from src.primitives.core.types import vec3f, vec3i
        from src.primitives.geometry.aabb import AABBf, AABBi

        results = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            outer = AABBi(min=vec3i(0, 0, 0), max=vec3i(4, 4, 4))
            inner = AABBf(min=vec3f(0.5, 1.0, 0.0), max=vec3f(3.5, 4.0, 2.0))
            results[0] = outer.contains_aabb(inner)
            results[1] = inner.contains_aabb(outer)

        test_kernel()
        assert results[0] == 1
        assert results[1] == 0


class TestAABBUnionIntersection:
    """Tests for union, union_point and intersection."""

    def test_overlapping_boxes(self):
        """Test [0..2]^3 and [1..3]^3: intersection [1..2]^3, union [0..3]^3."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        inter_lo = ti.field(dtype=vec3f, shape=())
        inter_hi = ti.field(dtype=vec3f, shape=())
        union_lo = ti.field(dtype=vec3f, shape=())
        union_hi = ti.field(dtype=vec3f, shape=())

        @ti.kernel
        def test_kernel():
            a = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(2.0, 2.0, 2.0))
            b = AABBf(min=vec3f(1.0, 1.0, 1.0), max=vec3f(3.0, 3.0, 3.0))
            inter = AABBf()
            union = AABBf()
            a.intersection(b, inter)
            a.union(b, union)
            inter_lo[None] = inter.min
            inter_hi[None] = inter.max
            union_lo[None] = union.min
            union_hi[None] = union.max

        test_kernel()
        for i in range(3):
            assert abs(inter_lo[None][i] - 1.0) < 1e-6
            assert abs(inter_hi[None][i] - 2.0) < 1e-6
            assert abs(union_lo[None][i] - 0.0) < 1e-6
            assert abs(union_hi[None][i] - 3.0) < 1e-6

    def test_union_and_intersection_commute(self):
        """Test swapping the operands gives the same result."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        same = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            a = AABBf(min=vec3f(-1.0, 0.5, 2.0), max=vec3f(4.0, 1.5, 3.0))
            b = AABBf(min=vec3f(0.0, -2.0, 2.5), max=vec3f(1.0, 1.0, 7.0))
            ab = AABBf()
            ba = AABBf()
            a.union(b, ab)
            b.union(a, ba)
            same[0] = ab.contains_aabb(ba) and ba.contains_aabb(ab)
            a.intersection(b, ab)
            b.intersection(a, ba)
            same[1] = ab.contains_aabb(ba) and ba.contains_aabb(ab)

        test_kernel()
        assert same[0] == 1
        assert same[1] == 1

    def test_union_contains_operands_and_intersection_is_contained(self):
        """Test union(A, B) contains both; intersection(A, B) lies in both."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        results = ti.field(dtype=ti.i32, shape=4)

        @ti.kernel
        def test_kernel():
            a = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(2.0, 5.0, 1.0))
            b = AABBf(min=vec3f(1.0, -1.0, 0.5), max=vec3f(6.0, 2.0, 4.0))
            union = AABBf()
            inter = AABBf()
            a.union(b, union)
            a.intersection(b, inter)
            results[0] = union.contains_aabb(a)
            results[1] = union.contains_aabb(b)
            results[2] = a.contains_aabb(inter)
            results[3] = b.contains_aabb(inter)

        test_kernel()
        assert all(results[i] == 1 for i in range(4))

    def test_disjoint_intersection_is_float_sentinel(self):
        """Test boxes disjoint on one axis produce +inf/-inf."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        lo = ti.field(dtype=vec3f, shape=())
        hi = ti.field(dtype=vec3f, shape=())

        @ti.kernel
        def test_kernel():
            a = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            b = AABBf(min=vec3f(0.0, 0.0, 2.0), max=vec3f(1.0, 1.0, 3.0))
            out = AABBf()
            a.intersection(b, out)
            lo[None] = out.min
            hi[None] = out.max

        test_kernel()
        assert all(math.isinf(v) and v > 0 for v in lo[None].to_numpy())
        assert all(math.isinf(v) and v < 0 for v in hi[None].to_numpy())

    def test_disjoint_intersection_into_integer_destination(self):
        """Test the sentinel follows the destination's precision."""
        from src.primitives.core.types import INT_MAX, INT_MIN, vec3d, vec3i
        from src.primitives.geometry.aabb import AABBd, AABBi

        lo = ti.field(dtype=vec3i, shape=())
        hi = ti.field(dtype=vec3i, shape=())

        @ti.kernel
        def test_kernel():
            a = AABBi(min=vec3i(0, 0, 0), max=vec3i(1, 1, 1))
            b = AABBd(min=vec3d(5.0, 5.0, 5.0), max=vec3d(6.0, 6.0, 6.0))
            out = AABBi()
            a.intersection(b, out)
            lo[None] = out.min
            hi[None] = out.max

        test_kernel()
        assert list(lo[None].to_numpy()) == [INT_MAX] * 3
        assert list(hi[None].to_numpy()) == [INT_MIN] * 3

    def test_touching_boxes_intersect_in_a_face(self):
        """Test boxes sharing a face intersect in a flat, valid box."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        valid = ti.field(dtype=ti.i32, shape=())
        overlaps = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            a = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            b = AABBf(min=vec3f(1.0, 0.0, 0.0), max=vec3f(2.0, 1.0, 1.0))
            out = AABBf()
            a.intersection(b, out)
            valid[None] = out.is_valid()
            overlaps[None] = a.intersects_aabb(b)

        test_kernel()
        assert valid[None] == 1
        assert overlaps[None] == 1

    def test_union_with_empty_is_identity(self):
        """Test the union of a box and the sentinel is the box."""
        from src.primitives.core.types import vec3i
        from src.primitives.geometry.aabb import AABBi

        lo = ti.field(dtype=vec3i, shape=())
        hi = ti.field(dtype=vec3i, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi(min=vec3i(-2, 3, 0), max=vec3i(4, 5, 1))
            empty = AABBi()
            empty.set_empty()
            out = AABBi()
            empty.union(box, out)
            lo[None] = out.min
            hi[None] = out.max

        test_kernel()
        assert list(lo[None].to_numpy()) == [-2, 3, 0]
        assert list(hi[None].to_numpy()) == [4, 5, 1]

    def test_union_point_grows_box(self):
        """Test union_point extends only the axes the point lies beyond."""
        from src.primitives.core.types import vec3d
        from src.primitives.geometry.aabb import AABBd

        lo = ti.field(dtype=vec3d, shape=())
        hi = ti.field(dtype=vec3d, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBd(min=vec3d(0.0, 0.0, 0.0), max=vec3d(1.0, 1.0, 1.0))
            box.union_point(vec3d(2.0, -1.0, 0.5), box)
            lo[None] = box.min
            hi[None] = box.max

        test_kernel()
        assert list(lo[None].to_numpy()) == [0.0, -1.0, 0.0]
        assert list(hi[None].to_numpy()) == [2.0, 1.0, 1.0]

    def test_mixed_precision_union_is_widened(self):
        """Test a float box united with a double box keeps double digits."""
        from src.primitives.core.types import vec3d, vec3f
        from src.primitives.geometry.aabb import AABBd, AABBf

        hi = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel(x: ti.f64):
            a = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            b = AABBd(min=vec3d(0.0, 0.0, 0.0), max=vec3d(x, 1.0, 1.0))
            out = AABBd()
            a.union(b, out)
            hi[None] = out.max.x

        test_kernel(1.0000000001)
        assert hi[None] > 1.0
        assert abs(hi[None] - 1.0000000001) < 1e-13


class TestAABBAccessors:
    """Tests for get_min, get_max, center and extent."""

    def test_get_min_max(self):
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        results = ti.field(dtype=ti.f32, shape=6)

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(1.0, 2.0, 3.0), max=vec3f(4.0, 5.0, 6.0))
            results[0] = box.get_min(0)
            results[1] = box.get_min(1)
            results[2] = box.get_min(2)
            results[3] = box.get_max(0)
            results[4] = box.get_max(1)
            results[5] = box.get_max(2)

        test_kernel()
        assert [results[i] for i in range(6)] == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_get_min_rejects_bad_component(self):
        """Test a component outside 0..2 fails when the kernel compiles."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(1.0, 2.0, 3.0), max=vec3f(4.0, 5.0, 6.0))
            result[None] = box.get_min(3)

        with pytest.raises(Exception):
            test_kernel()

    def test_center_and_extent(self):
        from src.primitives.core.types import vec3i
        from src.primitives.geometry.aabb import AABBi

        center = ti.field(dtype=ti.math.vec3, shape=())
        extent = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi(min=vec3i(0, 2, -3), max=vec3i(3, 4, 3))
            center[None] = box.center()
            extent[None] = box.extent()

        test_kernel()
        c = center[None]
        e = extent[None]
        assert abs(c[0] - 1.5) < 1e-6
        assert abs(c[1] - 3.0) < 1e-6
        assert abs(c[2] - 0.0) < 1e-6
        assert abs(e[0] - 1.5) < 1e-6
        assert abs(e[1] - 1.0) < 1e-6
        assert abs(e[2] - 3.0) < 1e-6


class TestAABBTransform:
    """Tests for translate and transform."""

    def test_translate(self):
        from src.primitives.core.types import vec3i
        from src.primitives.geometry.aabb import AABBi

        lo = ti.field(dtype=vec3i, shape=())
        hi = ti.field(dtype=vec3i, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi(min=vec3i(0, 0, 0), max=vec3i(1, 2, 3))
            out = AABBi()
            box.translate(vec3i(10, -1, 5), out)
            lo[None] = out.min
            hi[None] = out.max

        test_kernel()
        assert list(lo[None].to_numpy()) == [10, -1, 5]
        assert list(hi[None].to_numpy()) == [11, 1, 8]

    def test_transform_rotation_and_translation(self):
        """Test a 90 degree rotation about z followed by a translation."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        lo = ti.field(dtype=vec3f, shape=())
        hi = ti.field(dtype=vec3f, shape=())

        @ti.kernel
        def test_kernel():
            # (x, y, z) -> (-y, x, z) + (10, 0, 0)
            m = ti.Matrix(
                [
                    [0.0, -1.0, 0.0, 10.0],
                    [1.0, 0.0, 0.0, 0.0],
                    [0.0, 0.0, 1.0, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
            box = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(2.0, 1.0, 3.0))
            out = AABBf()
            box.transform(m, out)
            lo[None] = out.min
            hi[None] = out.max

        test_kernel()
        expected_lo = [9.0, 0.0, 0.0]
        expected_hi = [10.0, 2.0, 3.0]
        for i in range(3):
            assert abs(lo[None][i] - expected_lo[i]) < 1e-6
            assert abs(hi[None][i] - expected_hi[i]) < 1e-6

    def test_transform_rotation_bounds_corners(self):
        """Test a 45 degree rotation encloses all rotated corners."""
        from src.primitives.core.types import vec3d
        from src.primitives.geometry.aabb import AABBd

        lo = ti.field(dtype=vec3d, shape=())
        hi = ti.field(dtype=vec3d, shape=())
        @ti.kernel
        def test_kernel(s: ti.f64):
            m = ti.Matrix(
                [
                    [s, -s, 0.0, 0.0],
                    [s, s, 0.0, 0.0],
                    [0.0, 0.0, 1.0, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ],
                dt=ti.f64,
            )
            box = AABBd(min=vec3d(-1.0, -1.0, -1.0), max=vec3d(1.0, 1.0, 1.0))
            out = AABBd()
            box.transform(m, out)
            lo[None] = out.min
            hi[None] = out.max

        test_kernel(math.sqrt(0.5))
        r = math.sqrt(2.0)
        assert abs(lo[None][0] + r) < 1e-9
        assert abs(hi[None][0] - r) < 1e-9
        assert abs(lo[None][1] + r) < 1e-9
        assert abs(hi[None][1] - r) < 1e-9
        assert abs(lo[None][2] + 1.0) < 1e-9
        assert abs(hi[None][2] - 1.0) < 1e-9


class TestAABBShapeTests:
    """Tests for box-sphere and box-plane intersection."""

    def test_sphere_far_from_box(self):
        """Test unit sphere at origin misses box (2,2,2)-(3,3,3)."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf
        from src.primitives.geometry.sphere import Spheref

        result = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(2.0, 2.0, 2.0), max=vec3f(3.0, 3.0, 3.0))
            sphere = Spheref(center=vec3f(0.0, 0.0, 0.0), radius=1.0)
            result[0] = box.intersects_sphere(sphere)
            result[1] = sphere.intersects_aabb(box)

        test_kernel()
        assert result[0] == 0
        assert result[1] == 0

    def test_sphere_touching_face(self):
        """Test a sphere touching a face intersects (closed test)."""
        from src.primitives.core.types import vec3d, vec3i
        from src.primitives.geometry.aabb import AABBi
        from src.primitives.geometry.sphere import Sphered

        result = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            box = AABBi(min=vec3i(0, 0, 0), max=vec3i(1, 1, 1))
            touching = Sphered(center=vec3d(3.0, 0.5, 0.5), radius=2.0)
            apart = Sphered(center=vec3d(3.0, 0.5, 0.5), radius=1.999)
            result[0] = box.intersects_sphere(touching)
            result[1] = box.intersects_sphere(apart)

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0

    def test_sphere_near_corner(self):
        """Test the corner distance is used, not the per-axis distance."""
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf

        result = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            # Distance to corner (1, 1, 1) is sqrt(3) ~ 1.732
            result[0] = box.intersects_sphere_coeffs(vec3f(2.0, 2.0, 2.0), 1.7)
            result[1] = box.intersects_sphere_coeffs(vec3f(2.0, 2.0, 2.0), 1.75)

        test_kernel()
        assert result[0] == 0
        assert result[1] == 1

    def test_plane_through_box(self):
        from src.primitives.core.types import vec3f
        from src.primitives.geometry.aabb import AABBf
        from src.primitives.geometry.plane import Planef

        result = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            box = AABBf(min=vec3f(0.0, 0.0, 0.0), max=vec3f(1.0, 1.0, 1.0))
            # x = 0.5
            through = Planef(a=1.0, b=0.0, c=0.0, d=-0.5)
            # x + y + z = 4, beyond the far corner
            beyond = Planef(a=1.0, b=1.0, c=1.0, d=-4.0)
            # Unnormalized x = 1 touches the face
            touching = Planef(a=3.0, b=0.0, c=0.0, d=-3.0)
            result[0] = box.intersects_plane(through)
            result[1] = box.intersects_plane(beyond)
            result[2] = box.intersects_plane(touching)

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0
        assert result[2] == 1


class TestIntegerBoxLimits:
    """Tests for integer boxes at the i32 limits, including the empty sentinel."""

    def test_empty_int_box_misses_plane(self):
        from src.primitives.geometry.aabb import AABBi
        from src.primitives.geometry.plane import Planef

        result = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            box = AABBi()
            box.set_empty()
            # x = 0 and y = 0
            result[0] = box.intersects_plane(Planef(a=1.0, b=0.0, c=0.0, d=0.0))
            result[1] = box.intersects_plane_coeffs(0.0, 1.0, 0.0, 0.0)

        test_kernel()
        assert result[0] == 0
        assert result[1] == 0

    def test_large_int_box_hits_plane(self):
        """Test a box spanning +/-2e9 still has a positive extent."""
        from src.primitives.core.types import vec3i
        from src.primitives.geometry.aabb import AABBi
        from src.primitives.geometry.plane import Planef

        result = ti.field(dtype=ti.i32, shape=2)
        center = ti.field(dtype=ti.math.vec3, shape=())
        extent = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi(min=vec3i(-2000000000, 0, 0), max=vec3i(2000000000, 1, 1))
            result[0] = box.intersects_plane(Planef(a=1.0, b=0.0, c=0.0, d=0.0))
            # x = 1.9e9 still cuts the box
            result[1] = box.intersects_plane(Planef(a=1.0, b=0.0, c=0.0, d=-1.9e9))
            center[None] = box.center()
            extent[None] = box.extent()

        test_kernel()
        assert result[0] == 1
        assert result[1] == 1
        c = center[None].to_numpy()
        e = extent[None].to_numpy()
        assert abs(c[0]) < 1.0
        assert e[0] == pytest.approx(2e9, rel=1e-6)
        assert e[1] == pytest.approx(0.5)

    def test_empty_int_box_center_and_extent(self):
        """Test the sentinel has a negative extent instead of wrapping around."""
        from src.primitives.geometry.aabb import AABBi

        extent = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi()
            box.set_empty()
            extent[None] = box.extent()

        test_kernel()
        assert all(v < 0 for v in extent[None].to_numpy())

    def test_empty_int_box_union_point(self):
        """Test growing the sentinel by a point gives the point box."""
        from src.primitives.core.types import vec3i
        from src.primitives.geometry.aabb import AABBi

        lo = ti.field(dtype=vec3i, shape=())
        hi = ti.field(dtype=vec3i, shape=())
        valid = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            box = AABBi()
            box.set_empty()
            box.union_point(vec3i(4, -2, 7), box)
            lo[None] = box.min
            hi[None] = box.max
            valid[None] = box.is_valid()

        test_kernel()
        assert list(lo[None].to_numpy()) == [4, -2, 7]
        assert list(hi[None].to_numpy()) == [4, -2, 7]
        assert valid[None] == 1

    def test_int_transform_rounds_outward(self):
        """Test an integer box transform floors the minimum and ceils the maximum."""
        from src.primitives.core.types import vec3i
        from src.primitives.geometry.aabb import AABBi

        lo = ti.field(dtype=vec3i, shape=2)
        hi = ti.field(dtype=vec3i, shape=2)

        @ti.kernel
        def test_kernel(s: ti.f64):
            # (x, y, z) -> (-y, x, z) + (10.5, 0, 0)
            m = ti.Matrix(
                [
                    [0.0, -1.0, 0.0, 10.5],
                    [1.0, 0.0, 0.0, 0.0],
                    [0.0, 0.0, 1.0, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
            box = AABBi(min=vec3i(0, 0, 0), max=vec3i(2, 1, 3))
            out = AABBi()
            box.transform(m, out)
            lo[0] = out.min
            hi[0] = out.max

            # 45 degrees about z
            r = ti.Matrix(
                [
                    [s, -s, 0.0, 0.0],
                    [s, s, 0.0, 0.0],
                    [0.0, 0.0, 1.0, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ],
                dt=ti.f64,
            )
            unit = AABBi(min=vec3i(-1, -1, -1), max=vec3i(1, 1, 1))
            unit.transform(r, unit)
            lo[1] = unit.min
            hi[1] = unit.max

        test_kernel(math.sqrt(0.5))
        assert list(lo[0].to_numpy()) == [9, 0, 0]
        assert list(hi[0].to_numpy()) == [11, 2, 3]
        assert list(lo[1].to_numpy()) == [-2, -2, -1]
        assert list(hi[1].to_numpy()) == [2, 2, 1]
