import numpy as np
from tile_denoise.models import VisualizationSet


def test_visualizationset_defaults():
    vs = VisualizationSet()
    assert vs.tile_overlay is None
    assert vs.noise_heatmap is None


def test_visualizationset_accepts_arrays():
    vs = VisualizationSet(tile_overlay=np.zeros((2, 2, 3), dtype=np.uint8))
    assert vs.tile_overlay.shape == (2, 2, 3)
