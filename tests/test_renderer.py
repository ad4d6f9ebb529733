"""Tests for result rendering."""

from room_designer.models import FormState, InputMode, ResultState
from room_designer.renderer import LOADING_TEXT, BlockKind, render_result

AFTER = "data:image/png;base64,QUZURVI="
BEFORE = "data:image/jpeg;base64,QkVGT1JF"


def kinds(blocks):
    return [block.kind for block in blocks]


def test_loading_hides_everything_else():
    result = ResultState(is_loading=True, generated_image_data_uri=AFTER, error_message="x")
    blocks = render_result(FormState(), result)
    assert kinds(blocks) == [BlockKind.LOADING]
    assert blocks[0].text == LOADING_TEXT


def test_empty_result_renders_nothing():
    assert render_result(FormState(), ResultState()) == []


def test_error_only():
    blocks = render_result(FormState(), ResultState(error_message="Please upload a photo"))
    assert kinds(blocks) == [BlockKind.ALERT]
    assert blocks[0].text == "Please upload a photo"


def test_photo_input_shows_before_and_after():
    form = FormState(input_mode=InputMode.PHOTO, preview_data_uri=BEFORE)
    result = ResultState(
        generated_image_data_uri=AFTER,
        decoration_tips="Soft rug",
        baby_essentials="Crib",
    )

    blocks = render_result(form, result)

    assert kinds(blocks) == [BlockKind.COMPARISON, BlockKind.TIPS, BlockKind.ESSENTIALS]
    images = blocks[0].images
    assert [image.title for image in images] == ["Before", "After"]
    assert images[0].data_uri == BEFORE
    assert images[1].data_uri == AFTER


def test_description_input_shows_single_suggestion():
    form = FormState(input_mode=InputMode.DESCRIPTION, preview_data_uri=BEFORE)
    blocks = render_result(form, ResultState(generated_image_data_uri=AFTER))
    assert [image.title for image in blocks[0].images] == ["Suggestion"]


def test_empty_panels_are_skipped():
    result = ResultState(generated_image_data_uri=AFTER, decoration_tips="", baby_essentials="Crib")
    assert kinds(render_result(FormState(), result)) == [BlockKind.COMPARISON, BlockKind.ESSENTIALS]


def test_partial_failure_shows_image_then_alert():
    result = ResultState(generated_image_data_uri=AFTER, error_message="timeout")
    assert kinds(render_result(FormState(), result)) == [BlockKind.COMPARISON, BlockKind.ALERT]
