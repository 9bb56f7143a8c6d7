"""Defocus display targets."""

from .targets import DisplayTarget, MemoryDisplay, ImageFileDisplay, CENTER

__all__ = ["DisplayTarget", "MemoryDisplay", "ImageFileDisplay", "CENTER"]
