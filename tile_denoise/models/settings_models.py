"""Parameter models for pipeline configuration.

This module defines Pydantic models that encapsulate all configurable
parameters of the denoising pipeline: the tile grid, the per-tile filter
chain and the worker pool. The defaults reproduce the reference behaviour
of a 6×6 grid, a 3×3 median filter, a noise threshold of 33 and a 21×21
Gaussian kernel.
"""

from pydantic import BaseModel, Field, field_validator


class GridParams(BaseModel):
    """Configuration of the tile grid.

    Attributes:
        grid_size: Number of tile rows and columns (default 6, so 36 tiles).
    """

    grid_size: int = Field(6, ge=1, description="Number of tile rows and columns")


class FilterParams(BaseModel):
    """Configuration parameters for the per-tile filter chain.

    Every tile is median filtered first. The mean absolute difference
    between the raw and the median-filtered tile is the tile's noise
    score; tiles scoring strictly above ``noise_threshold`` receive an
    additional Gaussian blur.

    Attributes:
        median_kernel_size: Odd aperture of the median filter (default 3).
        noise_threshold: Noise score above which the Gaussian pass runs (default 33).
        gaussian_kernel_size: Odd aperture of the Gaussian kernel (default 21).
        gaussian_sigma: Gaussian standard deviation; 0 derives it from the
            kernel size (default 0).
    """

    median_kernel_size: int = Field(
        3, ge=3, description="Odd aperture of the median filter"
    )
    noise_threshold: float = Field(
        33.0, ge=0.0, description="Noise score that triggers the Gaussian pass"
    )
    gaussian_kernel_size: int = Field(
        21, ge=1, description="Odd aperture of the Gaussian kernel"
    )
    gaussian_sigma: float = Field(
        0.0, ge=0.0, description="Gaussian sigma, 0 derives it from the kernel size"
    )

    @field_validator("median_kernel_size", "gaussian_kernel_size")
    @classmethod
    def _must_be_odd(cls, value: int) -> int:
        if value % 2 == 0:
            raise ValueError(f"kernel size must be odd, got {value}")
        return value


class SchedulerParams(BaseModel):
    """Configuration of the tile worker pool.

    Attributes:
        max_workers: Number of worker threads, or None to use the number
            of available CPUs.
    """

    max_workers: int | None = Field(
        None, ge=1, description="Worker thread count, None for CPU count"
    )


class ProcessingParameters(BaseModel):
    """Complete configuration for the denoising pipeline.

    Attributes:
        grid: Tile grid parameters.
        filter: Per-tile filter chain parameters.
        scheduler: Worker pool parameters.
    """

    grid: GridParams = Field(default_factory=GridParams, description="Tile grid")
    filter: FilterParams = Field(
        default_factory=FilterParams, description="Per-tile filter chain"
    )
    scheduler: SchedulerParams = Field(
        default_factory=SchedulerParams, description="Worker pool"
    )
