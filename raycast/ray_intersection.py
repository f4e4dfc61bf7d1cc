from typing import List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict

from .config_models import Ray, Segment, Vector2


class RayIntersectionOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    intersects: bool
    intersection: Optional[Vector2] = None
    distance: Optional[float] = None  # from the ray origin
    t: Optional[float] = None  # along the segment, in (0, 1)
    u: Optional[float] = None  # along the ray, > 0
    segment_index: Optional[int] = None


NoHit = RayIntersectionOutput(intersects=False)


def _is_parallel(den: float, epsilon: Optional[float]) -> bool:
    if epsilon is None:
        return den == 0
    return abs(den) <= epsilon


# ===== SINGLE-RAY FUNCTIONS =====


def ray_segment_intersection(
    ray: Ray, segment: Segment, epsilon: Optional[float] = None
) -> RayIntersectionOutput:
    """
    Compute intersection between an infinite ray and a line segment.

    Solves the two-line intersection in determinant form, where t runs
    along the segment and u along the ray. Only hits strictly inside the
    segment (0 < t < 1) and strictly ahead of the origin (u > 0) count.

    Args:
        ray: Ray with origin and unit direction
        segment: Wall segment
        epsilon: Optional tolerance on the denominator. None means only an
            exact zero is treated as parallel.

    Returns:
        RayIntersectionOutput, NoHit when the ray misses
    """
    x1, y1 = segment.a.x, segment.a.y
    x2, y2 = segment.b.x, segment.b.y

    # Second point on the ray line
    ahead = ray.origin + ray.direction

    x3, y3 = ray.origin.x, ray.origin.y
    x4, y4 = ahead.x, ahead.y

    den = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Lines are parallel or coincident
    if _is_parallel(den, epsilon):
        return NoHit

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / den
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / den

    if not (0 < t < 1 and u > 0):
        return NoHit

    point = Vector2(x=x1 + t * (x2 - x1), y=y1 + t * (y2 - y1))

    return RayIntersectionOutput(
        intersects=True,
        intersection=point,
        distance=ray.origin.distance(point),
        t=t,
        u=u,
    )


def intersect(
    ray: Ray, segment: Segment, epsilon: Optional[float] = None
) -> Optional[Vector2]:
    return ray_segment_intersection(ray, segment, epsilon).intersection


def nearest_hit_detailed(
    ray: Ray, segments: List[Segment], epsilon: Optional[float] = None
) -> RayIntersectionOutput:
    """
    Find the closest intersection between a ray and a list of segments.
    On equal distance the segment that comes first in the list wins.
    """
    closest = NoHit
    closest_distance = float("inf")

    for index, segment in enumerate(segments):
        result = ray_segment_intersection(ray, segment, epsilon)
        if result.intersects and result.distance < closest_distance:
            closest_distance = result.distance
            closest = result.model_copy(update={"segment_index": index})

    return closest


def nearest_hit(
    ray: Ray, segments: List[Segment], epsilon: Optional[float] = None
) -> Optional[Vector2]:
    return nearest_hit_detailed(ray, segments, epsilon).intersection


# ===== VECTORIZED BATCH INTERSECTION FUNCTIONS =====


def batch_ray_segment_intersection(
    rays: np.ndarray, segments: np.ndarray, epsilon: Optional[float] = None
) -> np.ndarray:
    """
    Vectorized ray-segment intersection for multiple rays and segments.

    Args:
        rays: [N, 4] array of [origin_x, origin_y, dir_x, dir_y]
        segments: [M, 4] array of [a_x, a_y, b_x, b_y]
        epsilon: Optional tolerance on the denominator (None = exact zero)

    Returns:
        distances: [N, M] array of distances from the ray origin (np.inf for no intersection)
    """
    if len(rays) == 0 or len(segments) == 0:
        return np.full((len(rays), len(segments)), np.inf)

    x3 = rays[:, None, 0]  # [N, 1]
    y3 = rays[:, None, 1]
    x4 = x3 + rays[:, None, 2]
    y4 = y3 + rays[:, None, 3]

    x1 = segments[None, :, 0]  # [1, M]
    y1 = segments[None, :, 1]
    x2 = segments[None, :, 2]
    y2 = segments[None, :, 3]

    den = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)  # [N, M]

    if epsilon is None:
        parallel_mask = den == 0
    else:
        parallel_mask = np.abs(den) <= epsilon

    safe_den = np.where(parallel_mask, 1.0, den)
    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / safe_den
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / safe_den

    valid = ~parallel_mask & (t > 0) & (t < 1) & (u > 0)

    hit_x = x1 + t * (x2 - x1)
    hit_y = y1 + t * (y2 - y1)
    distances = np.hypot(hit_x - x3, hit_y - y3)

    return np.where(valid, distances, np.inf)


def batch_nearest_hits(
    rays: np.ndarray, segments: np.ndarray, epsilon: Optional[float] = None
) -> List[RayIntersectionOutput]:
    """
    Vectorized nearest-hit selection, one RayIntersectionOutput per ray.
    Ties resolve to the lowest segment index.
    """
    if len(rays) == 0:
        return []

    distances = batch_ray_segment_intersection(rays, segments, epsilon)

    results = []
    for i in range(len(rays)):
        if distances.shape[1] == 0:
            results.append(NoHit)
            continue

        min_idx = int(np.argmin(distances[i]))
        if not np.isfinite(distances[i, min_idx]):
            results.append(NoHit)
            continue

        # Recompute the exact point with the scalar routine
        ray = Ray(
            origin=Vector2(x=rays[i, 0], y=rays[i, 1]),
            direction=Vector2(x=rays[i, 2], y=rays[i, 3]),
        )
        segment = Segment.from_coords(*segments[min_idx])
        result = ray_segment_intersection(ray, segment, epsilon)
        results.append(result.model_copy(update={"segment_index": min_idx}))

    return results


# ===== HELPER FUNCTIONS FOR EASY CONVERSION =====


def rays_to_array(ray_list: List[Ray]) -> np.ndarray:
    """Convert list of Ray objects to numpy array format."""
    if not ray_list:
        return np.empty((0, 4))
    return np.array([ray.to_array() for ray in ray_list])


def segments_to_array(segment_list: List[Segment]) -> np.ndarray:
    """Convert list of Segment objects to numpy array format."""
    if not segment_list:
        return np.empty((0, 4))
    return np.array([segment.to_array() for segment in segment_list])
