import logging
from typing import List, Optional

import numpy as np

from .config_models import Segment, SimulationConfig, Vector2
from .emitter import Emitter
from .ray_intersection import RayIntersectionOutput
from .renderer_models import EmitterState, RenderState
from .world import build_world

logger = logging.getLogger(__name__)


class Simulation:
    """
    Holds everything one frame needs: the static obstacle set and the
    emitter. The driver owns one instance and calls step() per frame.
    """

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.segments: Optional[List[Segment]] = None
        self.emitter = Emitter(
            config.emitter,
            Vector2(x=config.world.width / 2, y=config.world.height / 2),
        )
        self.last_results: List[RayIntersectionOutput] = []
        self.num_steps = 0

    def reset(self, seed: Optional[int] = None) -> List[Segment]:
        if seed is None:
            seed = self.config.seed
        rng = np.random.default_rng(seed)
        logger.debug("Building world with seed %s", seed)

        self.segments = build_world(self.config.world, rng)
        self.emitter.update(self.config.world.width / 2, self.config.world.height / 2)
        self.last_results = []
        self.num_steps = 0
        return self.segments

    def step(self, x: float, y: float) -> List[RayIntersectionOutput]:
        """Move the emitter to (x, y) and cast every ray against the world."""
        if self.segments is None:
            raise ValueError("Simulation has no obstacle set, call reset() first")

        self.emitter.update(x, y)
        self.last_results = self.emitter.look_detailed(
            self.segments, self.config.parallel_epsilon
        )
        self.num_steps += 1
        return self.last_results

    def get_hits(self) -> List[Optional[Vector2]]:
        return [result.intersection for result in self.last_results]

    def get_render_state(self) -> RenderState:
        return RenderState(
            width=self.config.world.width,
            height=self.config.world.height,
            segments=self.segments or [],
            emitter=EmitterState(
                position=self.emitter.position,
                hits=self.get_hits(),
            ),
        )
