"""Replace steps, position maps and multi-step transforms."""

from .step_map import MapResult, Mapping, Range, StepMap
from .steps import ReplaceStep, StepResult
from .transform import AppliedStep, Transform, TransformError

__all__ = [
    "AppliedStep",
    "MapResult",
    "Mapping",
    "Range",
    "ReplaceStep",
    "StepMap",
    "StepResult",
    "Transform",
    "TransformError",
]
