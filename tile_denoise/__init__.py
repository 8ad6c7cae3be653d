"""Adaptive tile-parallel denoising for grayscale images.

This package splits a grayscale image into an exact grid of tiles, estimates
a local noise level for every tile and applies a heavier smoothing pass only
where that level is high, then stitches the tiles back together.

The main processing pipeline consists of:
1. Partitioning the image into an N×N tile grid
2. Median filtering and noise scoring of each tile, in parallel
3. Conditional Gaussian smoothing of noisy tiles
4. Reconstruction of the output image from the processed tiles

Example:
    Basic usage through the pipeline API:

    >>> from tile_denoise.image_io import load_grayscale
    >>> from tile_denoise.models import ProcessingParameters
    >>> from tile_denoise.pipeline import denoise_image
    >>>
    >>> image = load_grayscale("input_scan.bmp")
    >>> result = denoise_image(image, ProcessingParameters())
    >>> result.image.pixels.shape == image.pixels.shape
    True
"""
