"""Models for representing pipeline processing results.

This module contains Pydantic models that encapsulate the outputs of the
denoising pipeline: the decision taken for every tile, the reconstructed
image of a single run and the summary of a batch of runs.
"""

from pydantic import BaseModel, ConfigDict, Field

from tile_denoise.models.core_models import GrayImage, Region


class TileResult(BaseModel):
    """Outcome of processing a single tile.

    Attributes:
        region: The tile rectangle that was processed.
        noise_score: Mean absolute difference between the raw tile and its
            median-filtered version.
        blurred: Whether the secondary Gaussian pass was applied.
    """

    region: Region
    noise_score: float = Field(..., ge=0.0, description="Median residual score")
    blurred: bool = Field(False, description="Gaussian pass applied")


class DenoiseResult(BaseModel):
    """Result of denoising one image.

    Attributes:
        image: Reconstructed output image, same shape as the input.
        tiles: Per-tile decisions in grid order (column-major).
        grid_size: Number of tile rows and columns used.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    image: GrayImage
    tiles: list[TileResult] = Field(default_factory=list, description="Tile decisions")
    grid_size: int = Field(..., ge=1, description="Tile rows and columns")

    @property
    def blurred_count(self) -> int:
        """Number of tiles that received the Gaussian pass."""
        return sum(1 for tile in self.tiles if tile.blurred)


class BatchItemResult(BaseModel):
    """Status of one image in a batch run.

    Attributes:
        name: Input file name.
        output_path: Where the result was written, empty if it was not.
        error: Error message if the image was skipped or failed.
        blurred_tiles: Number of tiles that received the Gaussian pass.
    """

    name: str
    output_path: str = Field("", description="Written output file")
    error: str | None = Field(None, description="Reason the image failed")
    blurred_tiles: int = Field(0, ge=0, description="Tiles with Gaussian pass")

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchReport(BaseModel):
    """Summary of a batch run.

    Attributes:
        items: Per-image statuses in processing order.
    """

    items: list[BatchItemResult] = Field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(1 for item in self.items if item.ok)

    @property
    def failed(self) -> int:
        return sum(1 for item in self.items if not item.ok)
