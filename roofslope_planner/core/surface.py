"""Reference surfaces and the surface containment test.

The reference surface is the already-extracted top face of the roof. Graph
construction asks, many times per candidate edge, whether a point lies on it:

1. Project the point into the surface's parametric (u, v) domain
2. If projection fails, retry with the point nudged ± tolerance along the normal
3. Test (u, v) against the trimmed boundary (outline minus voids/openings)
4. If the surface has no boundary query, fall back to its parametric bounding
   box expanded by the same tolerance

Surfaces:
- PlanarSurface: plane with a shapely outline polygon whose holes are voids
- BoundedPlaneSurface: plane with only a parametric bounding box
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np
import shapely
from shapely.geometry import Polygon

from roofslope_planner.constants import SurfaceConfig

UV = tuple[float, float]
BoundsUV = tuple[float, float, float, float]  # (u_min, v_min, u_max, v_max)


class ReferenceSurface(ABC):
    """Abstract top-face surface supporting projection and containment.

    Subclasses must provide projection to (u, v), a normal and a
    parametric bounding box. The trimmed-boundary query is optional:
    the default is_inside raises NotImplementedError.
    """

    @abstractmethod
    def normal_at(self, point: Sequence[float]) -> np.ndarray:
        """Unit normal of the surface near a point."""

    @abstractmethod
    def project(self, point: Sequence[float]) -> Optional[UV]:
        """Project a 3D point to parametric coordinates.

        Returns:
            (u, v), or None if the point cannot be projected.
        """

    @abstractmethod
    def bounding_box_uv(self) -> BoundsUV:
        """Parametric bounding box (u_min, v_min, u_max, v_max)."""

    def is_inside(self, uv: UV) -> bool:
        """Whether (u, v) lies within the trimmed boundary."""
        raise NotImplementedError(f"{type(self).__name__} has no boundary query")

    def project_many(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Project an (n, 3) array of points.

        Returns:
            Tuple (uv array of shape (n, 2), boolean mask of successful projections).
            Rows of failed projections are NaN.
        """
        uv = np.full((len(points), 2), np.nan)
        ok = np.zeros(len(points), dtype=bool)
        for k, point in enumerate(points):
            projected = self.project(point)
            if projected is not None:
                uv[k] = projected
                ok[k] = True
        return uv, ok

    def is_inside_many(self, uv: np.ndarray) -> np.ndarray:
        """Boundary query for an (n, 2) array; raises NotImplementedError like is_inside."""
        return np.array([self.is_inside((float(u), float(v))) for u, v in uv], dtype=bool)


class PlaneFrame:
    """Orthonormal frame (origin, u axis, v axis, normal) of a plane.

    Example:
        frame = PlaneFrame(origin=(0, 0, 10), normal=(0, 0, 1))
        frame.to_uv(np.array([[3.0, 4.0, 10.0]]))  # uv [[3, 4]], distance [0]
    """

    def __init__(
        self,
        origin: Sequence[float],
        normal: Sequence[float],
        u_axis: Optional[Sequence[float]] = None,
    ) -> None:
        n = np.asarray(normal, dtype=np.float64)
        norm = np.linalg.norm(n)
        if norm == 0:
            raise ValueError("Plane normal cannot be a zero vector")
        n = n / norm

        # World X projected onto the plane (world Y if the plane faces X)
        seed = np.asarray(u_axis, dtype=np.float64) if u_axis is not None else np.array([1.0, 0.0, 0.0])
        if abs(float(np.dot(seed, n))) > 0.999 * np.linalg.norm(seed):
            seed = np.array([0.0, 1.0, 0.0])
        u = seed - np.dot(seed, n) * n
        u = u / np.linalg.norm(u)
        v = np.cross(n, u)

        self.origin = np.asarray(origin, dtype=np.float64)
        self.normal = n
        self.u_axis = u
        self.v_axis = v

    def to_uv(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Map world points to (u, v) and signed distance from the plane."""
        rel = np.atleast_2d(points) - self.origin
        uv = np.column_stack((rel @ self.u_axis, rel @ self.v_axis))
        return uv, rel @ self.normal

    def to_world(self, uv: np.ndarray) -> np.ndarray:
        """Map (u, v) coordinates back onto the plane."""
        uv = np.atleast_2d(uv)
        return self.origin + uv[:, :1] * self.u_axis + uv[:, 1:2] * self.v_axis

    def lift_xy(self, xy: np.ndarray) -> np.ndarray:
        """Vertically project plan (x, y) coordinates onto the plane."""
        if abs(self.normal[2]) < 1e-12:
            raise ValueError("Cannot lift plan coordinates onto a vertical plane")
        xy = np.atleast_2d(np.asarray(xy, dtype=np.float64))
        nx, ny, nz = self.normal
        ox, oy, oz = self.origin
        z = oz - (nx * (xy[:, 0] - ox) + ny * (xy[:, 1] - oy)) / nz
        return np.column_stack((xy, z))


class _PlaneSurface(ReferenceSurface):
    """Shared projection logic for planar reference surfaces."""

    def __init__(self, frame: PlaneFrame, max_projection_distance: float) -> None:
        self.frame = frame
        self.max_projection_distance = max_projection_distance

    def normal_at(self, point: Sequence[float]) -> np.ndarray:
        return self.frame.normal

    def project(self, point: Sequence[float]) -> Optional[UV]:
        uv, distance = self.frame.to_uv(np.asarray(point, dtype=np.float64))
        if abs(distance[0]) > self.max_projection_distance:
            return None
        return (float(uv[0, 0]), float(uv[0, 1]))

    def project_many(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        uv, distance = self.frame.to_uv(points)
        ok = np.abs(distance) <= self.max_projection_distance
        uv[~ok] = np.nan
        return uv, ok


class PlanarSurface(_PlaneSurface):
    """Planar roof face trimmed by an outline polygon with voids.

    The outline lives in the plane's (u, v) coordinates; holes are the
    voids and openings that paths must not cross. Points on the boundary
    count as inside, and the boundary is padded by boundary_tolerance.

    Example:
        surface = PlanarSurface.horizontal(
            outline=[(0, 0), (20, 0), (20, 10), (0, 10)],
            holes=[[(8, 4), (12, 4), (12, 6), (8, 6)]],
        )
    """

    def __init__(
        self,
        frame: PlaneFrame,
        outline: Polygon,
        max_projection_distance: float = SurfaceConfig.MAX_PROJECTION_DISTANCE,
        boundary_tolerance: float = SurfaceConfig.PROJECTION_TOLERANCE,
    ) -> None:
        super().__init__(frame=frame, max_projection_distance=max_projection_distance)
        if outline.is_empty:
            raise ValueError("Surface outline cannot be empty")
        if not outline.is_valid:
            outline = outline.buffer(0)

        self.outline = outline
        self._region = outline.buffer(boundary_tolerance) if boundary_tolerance > 0 else outline
        shapely.prepare(self._region)

    @classmethod
    def horizontal(
        cls,
        outline: Sequence[Sequence[float]],
        holes: Sequence[Sequence[Sequence[float]]] = (),
        elevation: float = 0.0,
        **kwargs: float,
    ) -> "PlanarSurface":
        """Flat face at a constant elevation; (u, v) equals plan (x, y)."""
        frame = PlaneFrame(origin=(0.0, 0.0, elevation), normal=(0.0, 0.0, 1.0))
        return cls(frame=frame, outline=Polygon(outline, holes), **kwargs)

    @classmethod
    def from_plane(
        cls,
        origin: Sequence[float],
        normal: Sequence[float],
        outline: Sequence[Sequence[float]],
        holes: Sequence[Sequence[Sequence[float]]] = (),
        **kwargs: float,
    ) -> "PlanarSurface":
        """Tilted face; outline and holes are given in plan (x, y) and lifted onto the plane."""
        frame = PlaneFrame(origin=origin, normal=normal)

        def to_uv(ring: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
            uv, _ = frame.to_uv(frame.lift_xy(np.asarray(ring, dtype=np.float64)))
            return [(float(u), float(v)) for u, v in uv]

        polygon = Polygon(to_uv(outline), [to_uv(hole) for hole in holes])
        return cls(frame=frame, outline=polygon, **kwargs)

    def bounding_box_uv(self) -> BoundsUV:
        u_min, v_min, u_max, v_max = self.outline.bounds
        return (u_min, v_min, u_max, v_max)

    def is_inside(self, uv: UV) -> bool:
        return bool(shapely.intersects_xy(self._region, uv[0], uv[1]))

    def is_inside_many(self, uv: np.ndarray) -> np.ndarray:
        if len(uv) == 0:
            return np.zeros(0, dtype=bool)
        return np.asarray(shapely.intersects_xy(self._region, uv[:, 0], uv[:, 1]), dtype=bool)


class BoundedPlaneSurface(_PlaneSurface):
    """Planar face known only by its parametric bounding box.

    Has no trimmed-boundary query, so containment falls back to the box.
    """

    def __init__(
        self,
        frame: PlaneFrame,
        bounds_uv: BoundsUV,
        max_projection_distance: float = SurfaceConfig.MAX_PROJECTION_DISTANCE,
    ) -> None:
        super().__init__(frame=frame, max_projection_distance=max_projection_distance)
        u_min, v_min, u_max, v_max = bounds_uv
        if u_min > u_max or v_min > v_max:
            raise ValueError(f"Invalid parametric bounds {bounds_uv}")
        self._bounds = (float(u_min), float(v_min), float(u_max), float(v_max))

    def bounding_box_uv(self) -> BoundsUV:
        return self._bounds


class SurfaceContainmentTest:
    """Decides whether points lie on a reference surface.

    Holds one surface reference for the whole run. Pure predicate: no state
    changes between calls.

    Example:
        test = SurfaceContainmentTest(surface=surface)
        test.on_surface((5.0, 5.0, 0.0))  # True
    """

    def __init__(
        self,
        surface: ReferenceSurface,
        tolerance: float = SurfaceConfig.PROJECTION_TOLERANCE,
    ) -> None:
        """Initialize with the surface to test against.

        Args:
            surface: Reference top face
            tolerance: Normal nudge distance and bounding-box padding

        Raises:
            ValueError: If surface is None.
        """
        if surface is None:
            raise ValueError("Surface containment test requires a reference surface")
        self._surface = surface
        self._tolerance = tolerance

    @property
    def surface(self) -> ReferenceSurface:
        return self._surface

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def on_surface(self, point: Sequence[float]) -> bool:
        """Whether a single point lies on the surface."""
        uv = self._project_with_nudge(np.asarray(point, dtype=np.float64))
        if uv is None:
            return False
        try:
            return self._surface.is_inside(uv)
        except NotImplementedError:
            return bool(self._inside_bounds(np.array([uv]))[0])

    def on_surface_many(self, points: np.ndarray) -> np.ndarray:
        """Vectorized on_surface for an (n, 3) array of points."""
        points = np.atleast_2d(np.asarray(points, dtype=np.float64))
        uv, ok = self._surface.project_many(points)

        for nudge in (self._tolerance, -self._tolerance):
            if ok.all():
                break
            failed = np.flatnonzero(~ok)
            normals = np.array([self._surface.normal_at(points[k]) for k in failed])
            retry_uv, retry_ok = self._surface.project_many(points[failed] + normals * nudge)
            uv[failed[retry_ok]] = retry_uv[retry_ok]
            ok[failed[retry_ok]] = True

        result = np.zeros(len(points), dtype=bool)
        if not ok.any():
            return result
        try:
            result[ok] = self._surface.is_inside_many(uv[ok])
        except NotImplementedError:
            result[ok] = self._inside_bounds(uv[ok])
        return result

    def _project_with_nudge(self, point: np.ndarray) -> Optional[UV]:
        uv = self._surface.project(point)
        if uv is not None:
            return uv
        normal = self._surface.normal_at(point)
        for nudge in (self._tolerance, -self._tolerance):
            uv = self._surface.project(point + normal * nudge)
            if uv is not None:
                return uv
        return None

    def _inside_bounds(self, uv: np.ndarray) -> np.ndarray:
        u_min, v_min, u_max, v_max = self._surface.bounding_box_uv()
        tol = self._tolerance
        return (
            (uv[:, 0] >= u_min - tol)
            & (uv[:, 0] <= u_max + tol)
            & (uv[:, 1] >= v_min - tol)
            & (uv[:, 1] <= v_max + tol)
        )
