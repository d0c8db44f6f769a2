"""Utility helpers."""

from .image_normalizer import ImageNormalizer, normalize_image, to_data_uri

__all__ = ["ImageNormalizer", "normalize_image", "to_data_uri"]
