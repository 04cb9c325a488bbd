"""Shrink the embedded emoji images of the frontend dataset to WebP."""
