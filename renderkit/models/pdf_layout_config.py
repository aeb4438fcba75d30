"""PDF layout configuration model.

This module defines the PDFLayoutConfig Pydantic model that holds the page
options of the PDF engine. Options are read from ``options["config"]["pdf"]``
of a render call and validated here before any document is built.

Example:
    ```python
    from renderkit.models.pdf_layout_config import PDFLayoutConfig

    layout = PDFLayoutConfig(
        page_size="Letter",
        orientation="landscape",
        margins={"top": 36, "bottom": 36, "left": 54, "right": 54},
    )
    ```
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class PDFLayoutConfig(BaseModel):
    """PDF layout configuration for document formatting.

    All margin values are in points (1/72 inch).

    Attributes:
        page_size: Page size format (default: "A4", options: "A4", "Letter", "Legal")
        orientation: Page orientation (default: "portrait", options: "portrait", "landscape")
        margins: Dictionary with margin values in points (default: all 72pt)
        font_name: Base font for body text (default: "Helvetica", options: "Helvetica", "Times-Roman", "Courier")
        font_size: Base font size in points (default: 10)
        page_numbers: Whether to draw a page number footer (default: True)
        author: Optional document author metadata
    """

    model_config = {"extra": "forbid"}

    page_size: Literal["A4", "Letter", "Legal"] = Field(
        default="A4",
        description="Page size format",
    )

    orientation: Literal["portrait", "landscape"] = Field(
        default="portrait",
        description="Page orientation",
    )

    margins: dict[str, float] = Field(
        default_factory=lambda: {"top": 72.0, "bottom": 72.0, "left": 72.0, "right": 72.0},
        description="Margin values in points (1/72 inch)",
    )

    font_name: Literal["Helvetica", "Times-Roman", "Courier"] = Field(
        default="Helvetica",
        description="Base font for body text",
    )

    font_size: float = Field(
        default=10.0,
        description="Base font size in points",
        ge=4.0,
        le=72.0,
    )

    page_numbers: bool = Field(
        default=True,
        description="Draw a page number footer on every page",
    )

    author: str | None = Field(
        default=None,
        description="Document author metadata",
    )

    @field_validator("margins")
    @classmethod
    def validate_margins(cls, value: dict[str, float]) -> dict[str, float]:
        """Validate margins dictionary structure and values.

        Args:
            value: Margins dictionary to validate

        Returns:
            Validated margins dictionary

        Raises:
            ValueError: If margins structure is invalid or values are negative
        """
        required_keys = {"top", "bottom", "left", "right"}

        missing_keys = required_keys - set(value.keys())
        if missing_keys:
            raise ValueError(
                f"Margins dictionary missing required keys: {missing_keys}"
            )

        extra_keys = set(value.keys()) - required_keys
        if extra_keys:
            raise ValueError(
                f"Margins dictionary contains invalid keys: {extra_keys}"
            )

        validated_margins: dict[str, float] = {}
        for key in required_keys:
            margin_value = value[key]
            if margin_value < 0:
                raise ValueError(f"Margin '{key}' must be non-negative, got {margin_value}")
            validated_margins[key] = float(margin_value)

        return validated_margins
