"""Prompt builder utilities for Gemini."""

import logging

from room_designer.models import InputMode, SubjectCategory, VisualStyle

logger = logging.getLogger(__name__)

# Literal marker the text model must put between tips and essentials
SPLIT_TOKEN = "---SPLIT---"


def build_category_phrase(category: SubjectCategory) -> str:
    """Natural-language framing for the subject category.

    Args:
        category: Selected subject category

    Returns:
        Phrase such as "for a boy" or "with a gender-neutral theme"
    """
    if category == SubjectCategory.NEUTRAL:
        return "with a gender-neutral theme"
    return f"for a {category.value}"


def build_image_prompt(
    mode: InputMode,
    category: SubjectCategory,
    style: VisualStyle,
    description: str = "",
) -> str:
    """Build prompt for the image generation call.

    Args:
        mode: Active input mode, selects the template
        category: Subject category
        style: Visual style
        description: Typed room description (description mode only)

    Returns:
        Prompt text
    """
    category_text = build_category_phrase(category)
    style_text = style.value

    if mode == InputMode.PHOTO:
        return (
            "Based on the provided image, generate a new photorealistic image showing it "
            f"transformed into a baby nursery {category_text}, styled to feel "
            f"{style_text}, beautiful and functional. Your design must show an ideal and "
            "safe placement for a crib. Preserve the original architecture of the room: the size, shape "
            "and position of every window and door must be identical to the original image."
        )

    return (
        f'Based on this description of a room: "{description}", generate a photorealistic '
        f"image of it transformed into a baby nursery {category_text}, styled to feel "
        f"{style_text}. The image must show an ideal placement for the crib and accurately "
        "reflect the described layout."
    )


def build_advice_prompt(
    mode: InputMode,
    category: SubjectCategory,
    style: VisualStyle,
    description: str = "",
) -> str:
    """Build prompt for the decoration tips and essentials call.

    Args:
        mode: Active input mode
        category: Subject category
        style: Visual style
        description: Typed room description (quoted in description mode)

    Returns:
        Prompt text
    """
    room = "For the provided room"
    if mode == InputMode.DESCRIPTION:
        room = f'For the room described as "{description}"'

    return (
        f"{room}, give practical decoration advice and a list of essential items for a "
        f"baby nursery {build_category_phrase(category)}, styled to feel {style.value}. "
        f"Separate the two sections with the exact string '{SPLIT_TOKEN}'. "
        "Do not use markdown or asterisks. Keep both texts short."
    )
