"""Turns form and result state into display blocks."""

from dataclasses import dataclass, field
from enum import Enum

from room_designer.models import FormState, InputMode, ResultState

LOADING_TEXT = "Designing your dream nursery..."
RESULT_TITLE = "Our visual suggestion"
TIPS_TITLE = "Decoration tips"
ESSENTIALS_TITLE = "Baby essentials"


class BlockKind(str, Enum):
    LOADING = "loading"
    ALERT = "alert"
    COMPARISON = "comparison"
    TIPS = "tips"
    ESSENTIALS = "essentials"


@dataclass(frozen=True)
class Image:
    title: str
    data_uri: str


@dataclass(frozen=True)
class Block:
    """One piece of the result area."""

    kind: BlockKind
    title: str = ""
    text: str = ""
    images: tuple[Image, ...] = field(default_factory=tuple)


def render_comparison(form: FormState, result: ResultState) -> Block:
    """Before/after pair, or the suggestion alone when there is no photo."""
    before = form.preview_data_uri if form.input_mode == InputMode.PHOTO else None
    if before:
        images = (
            Image("Before", before),
            Image("After", result.generated_image_data_uri),
        )
    else:
        images = (Image("Suggestion", result.generated_image_data_uri),)
    return Block(BlockKind.COMPARISON, title=RESULT_TITLE, images=images)


def render_result(form: FormState, result: ResultState) -> list[Block]:
    """Blocks to show below the form, in display order.

    While loading only the loading block is shown. Otherwise the generated
    image (with its advice panels) comes first and any error follows it, so a
    failed advice step still shows the image that was already produced.
    """
    if result.is_loading:
        return [Block(BlockKind.LOADING, text=LOADING_TEXT)]

    blocks: list[Block] = []
    if result.generated_image_data_uri:
        blocks.append(render_comparison(form, result))
        if result.decoration_tips:
            blocks.append(Block(BlockKind.TIPS, title=TIPS_TITLE, text=result.decoration_tips))
        if result.baby_essentials:
            blocks.append(
                Block(BlockKind.ESSENTIALS, title=ESSENTIALS_TITLE, text=result.baby_essentials)
            )

    if result.error_message:
        blocks.append(Block(BlockKind.ALERT, text=result.error_message))

    return blocks
