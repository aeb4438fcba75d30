"""Pydantic models for engine options."""

from renderkit.models.pdf_layout_config import PDFLayoutConfig

__all__ = ["PDFLayoutConfig"]
