"""
Tests for the Textual front end, driven headless through Pilot.
"""
import asyncio

from logdog.config.settings import LoggingConfig
from logdog.detector import detect_language
from logdog.models.context import ProjectContext
from logdog.models.state import Screen
from logdog.ui.app import LogdogApp, normalize_key


def make_app(tmp_path):
    project = tmp_path / "shop"
    project.mkdir()
    (project / "go.mod").write_text("module example.com/shop\n")
    logs = project / "logdog" / "logs"
    logs.mkdir(parents=True)
    (logs / "logdog-2024-01-01.json").write_text('{"level": "INFO", "message": "hello"}\n')

    context = ProjectContext(
        project_path=project,
        language=detect_language(project),
        config=LoggingConfig(),
        global_root=tmp_path / "global",
    )
    return LogdogApp(context)


def test_normalize_key():
    assert normalize_key("escape") == "esc"
    assert normalize_key("plus") == "+"
    assert normalize_key("equals_sign") == "="
    assert normalize_key("minus") == "-"
    assert normalize_key("underscore") == "_"
    assert normalize_key("v") == "v"


def test_settings_navigation(tmp_path):
    app = make_app(tmp_path)

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("down", "down", "down", "enter")
            assert app.state.screen == Screen.SETTINGS
            await pilot.press("plus", "plus")
            assert app.state.retention_days == 9
            await pilot.press("escape")
            assert app.state.screen == Screen.MAIN

    asyncio.run(run())


def test_view_log_and_quit(tmp_path):
    app = make_app(tmp_path)

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("down", "enter", "v")
            assert app.state.screen == Screen.LOG_VIEW
            assert app.state.log_content.plain == "[INFO] hello"
            await pilot.press("escape", "q")
            await pilot.pause()

    asyncio.run(run())
    assert app.return_code == 0
