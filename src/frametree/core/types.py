"""Type definitions and aliases for transform trees."""

import numpy as np
import numpy.typing as npt

# Stable integer index of a node within a TransformTree
NodeId = int

# Coordinate types
Vector3 = tuple[float, float, float]
EulerXYZ = tuple[float, float, float]
FloatArray = npt.NDArray[np.float64]

__all__ = [
    "NodeId",
    "Vector3",
    "EulerXYZ",
    "FloatArray",
]
