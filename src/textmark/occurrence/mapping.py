"""Linear mapping from character offsets onto a bounded visual axis."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class CoordinateMap:
    """Monotonic map from ``[0, length]`` onto ``[margin, extent - margin]``.

    Offsets outside the domain are clamped to the ends of the axis. An empty
    text maps every offset to the start of the axis.

    Attributes:
        length: Length of the mapped text
        extent: Total visual length of the axis
        margin: Space reserved at both ends of the axis
    """

    length: int
    extent: float
    margin: float

    @property
    def axis_start(self) -> float:
        return self.margin

    @property
    def axis_end(self) -> float:
        return self.extent - self.margin

    def scale_many(self, positions: Sequence[int] | npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Map an array of offsets onto the axis."""
        offsets = np.asarray(positions, dtype=np.float64)
        if self.length <= 0:
            return np.full(offsets.shape, self.axis_start, dtype=np.float64)
        return np.interp(offsets, [0.0, float(self.length)], [self.axis_start, self.axis_end])

    def scale(self, position: int) -> float:
        """Map a single offset onto the axis."""
        return float(self.scale_many([position])[0])
