from typing import List, Optional

import numpy as np

from .config_models import EmitterConfig, Ray, Segment, Vector2
from .ray_intersection import (
    RayIntersectionOutput,
    batch_nearest_hits,
    rays_to_array,
    segments_to_array,
)


def create_ray_directions(
    num_rays: int = 36,
    angle_step_degrees: float = 10.0,
    start_angle_degrees: float = 0.0,
) -> List[Vector2]:
    """
    Create the fixed fan of unit directions, one per ray, in angular order.

    Args:
        num_rays: Number of rays to generate
        angle_step_degrees: Angular spacing between consecutive rays
        start_angle_degrees: Angle of the first ray

    Returns:
        directions: list of unit Vector2
    """
    angles = np.radians(start_angle_degrees + np.arange(num_rays) * angle_step_degrees)
    return [Vector2.from_angle(angle) for angle in angles]


class Emitter:
    """
    Point source casting a fixed fan of rays.

    Rays keep only their direction. The current position is paired with
    each direction when the rays are requested, so moving the emitter
    never changes where a ray points.
    """

    def __init__(self, config: EmitterConfig, position: Vector2):
        self.config = config
        self.position = position
        self.directions = create_ray_directions(
            config.num_rays, config.angle_step_degrees, config.start_angle_degrees
        )

    @property
    def num_rays(self) -> int:
        return len(self.directions)

    def update(self, x: float, y: float):
        self.position = Vector2(x=x, y=y)

    def get_rays(self) -> List[Ray]:
        return [Ray(origin=self.position, direction=d) for d in self.directions]

    def look_detailed(
        self, segments: List[Segment], epsilon: Optional[float] = None
    ) -> List[RayIntersectionOutput]:
        if segments is None:
            raise ValueError("Emitter query needs an obstacle set, got None")
        # All rays against all walls in one vectorized pass
        return batch_nearest_hits(
            rays_to_array(self.get_rays()), segments_to_array(segments), epsilon
        )

    def look(
        self, segments: List[Segment], epsilon: Optional[float] = None
    ) -> List[Optional[Vector2]]:
        """Nearest hit point per ray, None where the ray strikes nothing."""
        return [result.intersection for result in self.look_detailed(segments, epsilon)]
