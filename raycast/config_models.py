import numpy as np
import yaml
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

"""
This file contains the value types and config settings shared by the different modules of this repo
"""


# A basic immutable vector class, also used to represent points
class Vector2(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        # Angle is in radians
        return cls(x=length * np.cos(angle), y=length * np.sin(angle))

    def length(self) -> float:
        return float(np.hypot(self.x, self.y))

    def distance(self, other: "Vector2") -> float:
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(x=self.x + other.x, y=self.y + other.y)


# A wall: the closed segment between a and b
class Segment(BaseModel):
    model_config = ConfigDict(frozen=True)

    a: Vector2
    b: Vector2

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        return cls(a=Vector2(x=x1, y=y1), b=Vector2(x=x2, y=y2))

    def to_array(self):
        return np.array([self.a.x, self.a.y, self.b.x, self.b.y])


# Half-line used as a visibility probe, direction has unit length
class Ray(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: Vector2
    direction: Vector2

    @classmethod
    def from_angle(cls, origin: Vector2, angle: float) -> "Ray":
        return cls(origin=origin, direction=Vector2.from_angle(angle))

    def to_array(self):
        return np.array([self.origin.x, self.origin.y, self.direction.x, self.direction.y])


class EmitterConfig(BaseModel):
    num_rays: int = Field(default=36, ge=1)
    angle_step_degrees: float = 10.0
    start_angle_degrees: float = 0.0


class WorldConfig(BaseModel):
    width: float = Field(default=600, gt=0)
    height: float = Field(default=600, gt=0)
    num_random_segments: int = Field(default=5, ge=0)
    num_quadrilaterals: int = Field(default=1, ge=0)
    num_triangles: int = Field(default=1, ge=0)
    bounding_box: bool = True
    boundary_inset: float = 1.0


class WindowConfig(BaseModel):
    target_fps: int = Field(default=60, gt=0)
    title: str = "Ray Casting"


class SimulationConfig(BaseModel):
    world: WorldConfig = WorldConfig()
    emitter: EmitterConfig = EmitterConfig()
    window: WindowConfig = WindowConfig()
    seed: Optional[int] = None
    # None keeps the exact-zero parallel test
    parallel_epsilon: Optional[float] = Field(default=None, ge=0)


def load_config(path: str) -> SimulationConfig:
    with open(path, "r") as f:
        config_data = yaml.safe_load(f) or {}
    return SimulationConfig(**config_data)
