"""Domain models for the tile-denoise package.

This module provides a centralized location for all data models used
throughout the denoising pipeline. It includes:

- Core domain models (GrayImage, Region)
- Pipeline results (TileResult, DenoiseResult, BatchItemResult, BatchReport)
- Configuration parameters for each processing stage
- Visualization data containers

All models are built using Pydantic for data validation, ensuring clear
interfaces between pipeline components.
"""

# Re-export core models
from tile_denoise.models.core_models import GrayImage, Region

# Re-export pipeline models
from tile_denoise.models.pipeline_models import (
    TileResult,
    DenoiseResult,
    BatchItemResult,
    BatchReport,
)

# Re-export setting models
from tile_denoise.models.settings_models import (
    GridParams,
    FilterParams,
    SchedulerParams,
    ProcessingParameters,
)

# Re-export visualization models
from tile_denoise.models.visualization_models import VisualizationSet
