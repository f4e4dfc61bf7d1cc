from pydantic import BaseModel
from typing import List, Optional
from .config_models import Segment, Vector2


class EmitterState(BaseModel):
    position: Vector2
    hits: List[Optional[Vector2]]


class RenderState(BaseModel):
    """
    A complete, serializable snapshot of the scene for a single frame.
    This object is renderer-agnostic.
    """

    width: float
    height: float
    segments: List[Segment]
    emitter: EmitterState
