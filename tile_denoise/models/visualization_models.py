"""Models for visualization outputs.

The VisualizationSet model aggregates the diagnostic images produced for
one denoising run in a single container.
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class VisualizationSet(BaseModel):
    """Diagnostic renderings of a denoising run.

    Attributes:
        tile_overlay: BGR image with the tile grid and the per-tile
            decisions drawn over the output, or None.
        noise_heatmap: RGB rendering of the per-tile noise scores, or None.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tile_overlay: np.ndarray | None = Field(
        None, description="Output image with tile decisions overlaid"
    )
    noise_heatmap: np.ndarray | None = Field(
        None, description="Heat map of per-tile noise scores"
    )
