import pytest

import phogo.tests.utils as testutils
from phogo.converter import RESET, RenderMode, pixel_to_char, render_image
from phogo.dispatcher import RenderRequest, run_render
from phogo.errors import RenderError

RAMP = " .,:;i1tfLCG08@"


def test_output_has_requested_size(tmp_path):
    image = testutils.setup_test_image(tmp_path / "wide.png", size=(40, 7))
    rows = render_image(str(image), 12, 5, RenderMode.GRAYSCALE).split("\n")
    assert len(rows) == 5
    assert all(len(row) == 12 for row in rows)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (RenderMode.GRAYSCALE, "@"),
        (RenderMode.DUOTONE, " "),
    ],
)
def test_ramp_direction(tmp_path, mode, expected):
    image = testutils.setup_test_image(tmp_path / "white.png", color=(255, 255, 255))
    assert set(render_image(str(image), 3, 2, mode).replace("\n", "")) == {expected}


def test_colored_modes_emit_truecolor_codes(tmp_path):
    image = testutils.setup_test_image(tmp_path / "red.png", color=(255, 0, 0))
    for mode in (RenderMode.COLOR, RenderMode.INVERTED):
        text = render_image(str(image), 2, 2, mode)
        for row in text.split("\n"):
            assert row.startswith("\x1b[38;2;255;0;0m")
            assert row.endswith(RESET)

    plain = render_image(str(image), 2, 2, RenderMode.GRAYSCALE)
    assert "\x1b" not in plain


def test_pixel_to_char_covers_the_ramp():
    assert pixel_to_char(0, RAMP) == RAMP[0]
    assert pixel_to_char(255, RAMP) == RAMP[-1]


def test_render_mode_lookups():
    assert [mode.digit for mode in RenderMode] == ["1", "2", "3", "4"]
    assert RenderMode.from_digit("3") is RenderMode.INVERTED
    assert RenderMode.from_label("grayscale") is RenderMode.GRAYSCALE
    with pytest.raises(ValueError):
        RenderMode.from_label("sepia")


def test_unreadable_files_raise_render_error(tmp_path):
    with pytest.raises(RenderError):
        render_image(str(tmp_path / "missing.png"), 4, 4)

    fake = tmp_path / "fake.png"
    testutils.setup_test_files(fake)
    with pytest.raises(RenderError) as e:
        render_image(str(fake), 4, 4)
    assert "fake.png" in e.value.message


def test_run_render_reports_result_with_sequence(tmp_path):
    image = testutils.setup_test_image(tmp_path / "ok.png")
    done = run_render(RenderRequest(7, str(image), 4, 2, RenderMode.GRAYSCALE))
    assert done.sequence == 7
    assert not done.failed
    assert len(done.text.split("\n")) == 2


def test_run_render_turns_failure_into_error_completion(tmp_path):
    done = run_render(
        RenderRequest(3, str(tmp_path / "gone.png"), 4, 2, RenderMode.COLOR)
    )
    assert done.sequence == 3
    assert done.failed
    assert done.text is None
    assert "gone.png" in done.error
