import dataclasses
import tempfile
from os import chdir, getcwd, path
from pathlib import Path

import pytest

import phogo.tests.utils as testutils
from phogo import fileops, state
from phogo.app import Application
from phogo.screens import DeleteFiles, PromptInput
from phogo.session import Mode
from phogo.WidgetsCore import FileList


@dataclasses.dataclass
class TestCase:
    name: str
    init_directory: Path
    startup_arg: str
    expected_directory: Path
    expected_focus: str
    expected_mode: Mode


@pytest.mark.asyncio
async def test_app_init_with_path():
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_dir = Path(path.realpath(temp_dir))
        dir1 = temp_dir / "dir1"
        image_a = temp_dir / "a.png"
        image_b = dir1 / "b.png"
        image_c = dir1 / "c.png"
        testutils.setup_test_dir(dir1)
        for image in (image_a, image_b, image_c):
            testutils.setup_test_image(image)

        test_cases: list[TestCase] = [
            TestCase(
                name="No argument",
                init_directory=dir1,
                startup_arg="",
                expected_directory=dir1,
                expected_focus=image_b.name,
                expected_mode=Mode.BROWSING,
            ),
            TestCase(
                name="Absolute Path",
                init_directory=temp_dir,
                startup_arg=str(dir1),
                expected_directory=dir1,
                expected_focus=image_b.name,
                expected_mode=Mode.BROWSING,
            ),
            TestCase(
                name="Relative path",
                init_directory=dir1,
                startup_arg="..",
                expected_directory=temp_dir,
                expected_focus=image_a.name,
                expected_mode=Mode.BROWSING,
            ),
            TestCase(
                name="Relative path of image",
                init_directory=temp_dir,
                startup_arg="dir1/c.png",
                expected_directory=dir1,
                expected_focus=image_c.name,
                expected_mode=Mode.VIEWING_IMAGE,
            ),
            TestCase(
                name="Non existing directory",
                init_directory=temp_dir,
                startup_arg="dir1/not/existing/path",
                expected_directory=dir1,
                expected_focus=image_b.name,
                expected_mode=Mode.BROWSING,
            ),
        ]
        cwd = getcwd()
        try:
            for t in test_cases:
                await run_test(t)
                print("Passed ", t.name)
        finally:
            chdir(cwd)


async def run_test(t: TestCase) -> None:
    chdir(t.init_directory)
    app = Application(startup_path=t.startup_arg)

    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.session.working_directory == str(t.expected_directory)
        assert app.session.mode is t.expected_mode

        file_list: FileList = app.main_screen.query_one("#file_list")
        assert file_list.option_count > 0, "File list is not populated"
        assert file_list.highlighted is not None
        highlighted_option = file_list.get_option_at_index(file_list.highlighted)
        actual_filename = state.decompress(highlighted_option.id)

        assert actual_filename == t.expected_focus, "Wrong item is highlighted"


@pytest.mark.asyncio
async def test_view_image_and_back(tmp_path):
    testutils.setup_test_image(tmp_path / "a.png", size=(8, 8))
    app = Application(startup_path=str(tmp_path))

    async with app.run_test() as pilot:
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.session.mode is Mode.VIEWING_IMAGE
        assert not app.session.pending_render
        assert app.session.displayed_content
        assert app.main_screen.query_one("#image_container").display
        assert not app.main_screen.query_one("#file_list_container").display

        await pilot.press("escape")
        await pilot.pause()
        assert app.session.mode is Mode.BROWSING
        assert app.main_screen.query_one("#file_list_container").display


@pytest.mark.asyncio
async def test_prompts_are_pushed_and_popped(tmp_path):
    for name in ("cat.png", "dog.png"):
        testutils.setup_test_image(tmp_path / name)
    app = Application(startup_path=str(tmp_path))

    async with app.run_test() as pilot:
        await pilot.press("slash")
        await pilot.pause()
        assert isinstance(app.screen, PromptInput)

        await pilot.press("c", "a", "t", "enter")
        await pilot.pause()
        assert app.screen is app.main_screen
        assert app.session.search_query == "cat"
        assert app.main_screen.query_one(FileList).option_count == 1

        await pilot.press("x")
        await pilot.pause()
        assert isinstance(app.screen, DeleteFiles)
        await pilot.press("n")
        await pilot.pause()
        assert app.screen is app.main_screen
        assert (tmp_path / "cat.png").exists()


def record_renders(app: Application) -> list:
    requests = []
    request_render = app.request_render

    def recording(request):
        requests.append(request)
        request_render(request)

    app.request_render = recording
    return requests


@pytest.mark.asyncio
async def test_first_render_fits_the_viewer(tmp_path):
    testutils.setup_test_image(tmp_path / "a.png", size=(8, 8))
    app = Application(startup_path=str(tmp_path))
    requests = record_renders(app)

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()
        region = app.main_screen.query_one("#image_container").scrollable_content_region
        assert len(requests) == 1
        assert (requests[0].width, requests[0].height) == (region.width, region.height)


@pytest.mark.asyncio
async def test_startup_image_render_fits_the_viewer(tmp_path):
    testutils.setup_test_image(tmp_path / "a.png", size=(8, 8))
    app = Application(startup_path=str(tmp_path / "a.png"))
    requests = record_renders(app)

    async with app.run_test(size=(80, 24)) as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.session.mode is Mode.VIEWING_IMAGE
        region = app.main_screen.query_one("#image_container").scrollable_content_region
        assert (requests[0].width, requests[0].height) == (region.width, region.height)


@pytest.mark.asyncio
async def test_clipboard_reports_fallback(tmp_path, monkeypatch):
    app = Application(startup_path=str(tmp_path))

    async with app.run_test() as pilot:
        monkeypatch.setattr(fileops, "copy_to_clipboard", lambda text: True)
        assert app.copy_to_clipboard("/some/path") is True

        monkeypatch.setattr(fileops, "copy_to_clipboard", lambda text: False)
        assert app.copy_to_clipboard("/some/path") is False
        await pilot.pause()
        assert app.clipboard == "/some/path"
