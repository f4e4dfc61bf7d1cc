import logging
from abc import ABC, abstractmethod
from typing import List, Literal, Optional

import numpy as np

from .config_models import Segment, WorldConfig

logger = logging.getLogger(__name__)

GeneratorType = Literal["random_segment", "quadrilateral", "triangle", "bounding_box"]


def sample_coordinates(width: float, height: float, rng: np.random.Generator):
    # Sampling order x1, x2, y1, y2 is part of the reproducible layout
    x1 = rng.uniform(0, width)
    x2 = rng.uniform(0, width)
    y1 = rng.uniform(0, height)
    y2 = rng.uniform(0, height)
    return x1, x2, y1, y2


class SegmentGenerator(ABC):
    @abstractmethod
    def generate(
        self, width: float, height: float, rng: np.random.Generator
    ) -> List[Segment]:
        pass


class RandomSegmentGenerator(SegmentGenerator):
    def generate(self, width, height, rng):
        x1, x2, y1, y2 = sample_coordinates(width, height, rng)
        return [Segment.from_coords(x1, y1, x2, y2)]


class QuadrilateralGenerator(SegmentGenerator):
    """
    Axis-aligned closed loop over two x levels and two y levels.
    Degenerate samples (x1 == x2) are not rejected.
    """

    def generate(self, width, height, rng):
        x1, x2, y1, y2 = sample_coordinates(width, height, rng)
        return [
            Segment.from_coords(x1, y2, x2, y2),  # bottom
            Segment.from_coords(x1, y1, x2, y1),  # top
            Segment.from_coords(x2, y1, x2, y2),  # right
            Segment.from_coords(x1, y1, x1, y2),  # left
        ]


class TriangleGenerator(SegmentGenerator):
    def generate(self, width, height, rng):
        x1, x2, y1, y2 = sample_coordinates(width, height, rng)
        return [
            Segment.from_coords(x1, y1, x2, y2),
            Segment.from_coords(x2, y2, x2, y1),
            Segment.from_coords(x2, y1, x1, y1),
        ]


class BoundingBoxGenerator(SegmentGenerator):
    """Viewport border, pushed out by `inset` on the near (x=0, y=0) edges."""

    def __init__(self, inset: float = 1.0):
        self.inset = inset

    def generate(self, width, height, rng):
        i = self.inset
        return [
            Segment.from_coords(-i, -i, width, -i),
            Segment.from_coords(width, -i, width, height),
            Segment.from_coords(width, height, -i, height),
            Segment.from_coords(-i, height, -i, -i),
        ]


class SegmentGeneratorFactory:
    @classmethod
    def create(cls, generator_type: GeneratorType, config: WorldConfig) -> SegmentGenerator:
        if generator_type == "random_segment":
            return RandomSegmentGenerator()
        elif generator_type == "quadrilateral":
            return QuadrilateralGenerator()
        elif generator_type == "triangle":
            return TriangleGenerator()
        elif generator_type == "bounding_box":
            return BoundingBoxGenerator(config.boundary_inset)
        else:
            raise ValueError(f"Unknown generator type: {generator_type}")


def get_recipe(config: WorldConfig) -> List[GeneratorType]:
    recipe: List[GeneratorType] = []
    recipe += ["random_segment"] * config.num_random_segments
    recipe += ["quadrilateral"] * config.num_quadrilaterals
    recipe += ["triangle"] * config.num_triangles
    if config.bounding_box:
        recipe.append("bounding_box")
    return recipe


def build_world(
    config: WorldConfig, rng: Optional[np.random.Generator] = None
) -> List[Segment]:
    """
    Assemble the obstacle set in recipe order: random segments,
    quadrilaterals, triangles, then the bounding box.

    Args:
        config: World dimensions and generator counts
        rng: Random source, pass a seeded generator for a reproducible layout

    Returns:
        segments: the ordered obstacle set
    """
    if rng is None:
        rng = np.random.default_rng()

    segments: List[Segment] = []
    for generator_type in get_recipe(config):
        generator = SegmentGeneratorFactory.create(generator_type, config)
        segments.extend(generator.generate(config.width, config.height, rng))

    logger.info(
        "Built world %sx%s with %d segments", config.width, config.height, len(segments)
    )
    return segments
