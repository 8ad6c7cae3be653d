"""
Visualization functions for the denoising pipeline.

These renderings show which tiles were judged noisy: an overlay of the
tile grid on the output image and a heat map of per-tile noise scores.
"""

import cv2
import numpy as np
from collections.abc import Sequence
import matplotlib.patches as patches
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from tile_denoise.models.core_models import GrayImage
from tile_denoise.models.pipeline_models import DenoiseResult, TileResult
from tile_denoise.models.visualization_models import VisualizationSet

SMOOTHED_COLOR = (0, 0, 255)  # red in BGR
KEPT_COLOR = (0, 255, 0)  # green in BGR


def create_tile_overlay(
    image: GrayImage | None,
    tiles: Sequence[TileResult],
    *,
    label_scores: bool = True,
) -> np.ndarray | None:
    """Draw the tile grid and per-tile decisions over an image.

    Tiles that received the Gaussian pass are outlined in red, tiles that
    kept the median result in green. Optionally the noise score is printed
    in the top-left corner of each tile.

    Args:
        image: Grayscale image to draw on, or None.
        tiles: Per-tile results to render.
        label_scores: Whether to print the noise score inside each tile.

    Returns:
        BGR image as H×W×3 uint8 array, or None if there is nothing to draw.
    """
    if image is None or not tiles:
        return None

    canvas = cv2.cvtColor(image.pixels, cv2.COLOR_GRAY2BGR)

    for tile in tiles:
        r = tile.region
        color = SMOOTHED_COLOR if tile.blurred else KEPT_COLOR
        cv2.rectangle(canvas, (r.x, r.y), (r.x_end - 1, r.y_end - 1), color, 1)

        if label_scores and r.width >= 24 and r.height >= 12:
            cv2.putText(
                canvas,
                f"{tile.noise_score:.0f}",
                (r.x + 2, r.y + 10),
                cv2.FONT_HERSHEY_PLAIN,
                0.7,
                color,
                1,
            )

    return canvas


def noise_score_grid(tiles: Sequence[TileResult], grid_size: int) -> np.ndarray:
    """Arrange per-tile noise scores into a ``(rows, cols)`` array."""
    grid = np.zeros((grid_size, grid_size), dtype=np.float64)
    for tile in tiles:
        grid[tile.region.row, tile.region.col] = tile.noise_score
    return grid


def create_noise_heatmap(
    result: DenoiseResult | None,
    threshold: float,
    *,
    size_in: float = 5.0,
    dpi: int = 100,
) -> Figure | None:
    """Create a heat map of per-tile noise scores.

    Cells above the threshold are hatched, and every cell carries its
    score as a label.

    Args:
        result: Denoising result with per-tile decisions, or None.
        threshold: Noise threshold used for the run.
        size_in: Figure width and height in inches (default 5.0).
        dpi: Raster resolution (default 100).

    Returns:
        Matplotlib Figure, or None if the result has no tiles.
    """
    if result is None or not result.tiles:
        return None

    scores = noise_score_grid(result.tiles, result.grid_size)

    fig = Figure(figsize=(size_in, size_in), dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(1, 1, 1)

    im = ax.imshow(scores, cmap="magma", vmin=0.0, vmax=max(threshold * 2, scores.max()))
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label="Noise score")

    for tile in result.tiles:
        row, col = tile.region.row, tile.region.col
        ax.text(
            col,
            row,
            f"{tile.noise_score:.1f}",
            ha="center",
            va="center",
            fontsize=7,
            color="white" if tile.noise_score < threshold else "black",
        )
        if tile.blurred:
            ax.add_patch(_cell_patch(col, row))

    ax.set_title(f"Tile noise scores (threshold {threshold:g})", fontsize=10)
    ax.set_xticks(range(result.grid_size))
    ax.set_yticks(range(result.grid_size))
    ax.set_xlabel("Column")
    ax.set_ylabel("Row")
    fig.tight_layout()
    return fig


def _cell_patch(col: int, row: int) -> patches.Rectangle:
    return patches.Rectangle(
        (col - 0.5, row - 0.5),
        1,
        1,
        fill=False,
        hatch="//",
        edgecolor="cyan",
        linewidth=0.8,
    )


def figure_to_array(fig: Figure) -> np.ndarray:
    """Render a matplotlib figure into an RGB uint8 array."""
    canvas = fig.canvas
    if not isinstance(canvas, FigureCanvasAgg):
        canvas = FigureCanvasAgg(fig)
    canvas.draw()
    rgba = np.asarray(canvas.buffer_rgba())
    return rgba[..., :3].copy()


def create_all_visualizations(
    result: DenoiseResult | None, threshold: float
) -> VisualizationSet:
    """Create the complete set of visualizations for a denoising run.

    Args:
        result: Denoising result, or None.
        threshold: Noise threshold used for the run.

    Returns:
        VisualizationSet; fields are None where nothing could be rendered.
    """
    if result is None:
        return VisualizationSet()

    overlay = create_tile_overlay(result.image, result.tiles)

    heatmap = None
    fig = create_noise_heatmap(result, threshold)
    if fig is not None:
        heatmap = figure_to_array(fig)

    return VisualizationSet(tile_overlay=overlay, noise_heatmap=heatmap)
