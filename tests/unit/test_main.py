"""Unit tests for the run modes in serenity.main."""

import os
from unittest.mock import patch

import pytest
import pytest_check as check

from serenity.main import main, run_separate


class TestRunSeparate:
    """API in a child process, screens in the current one."""

    def test_starts_api_then_screens(self) -> None:
        with (
            patch("subprocess.Popen") as popen,
            patch("serenity.main.run_ui") as run_ui,
            patch.dict(os.environ, {"PORT": "9000"}),
        ):
            run_separate()

        command = popen.call_args.args[0]
        check.equal(command[1:4], ["-m", "uvicorn", "serenity.api.app:app"])
        check.equal(command[-1], "9000")
        run_ui.assert_called_once_with()
        popen.return_value.terminate.assert_called_once_with()
        popen.return_value.wait.assert_called_once_with()

    def test_api_stopped_when_screens_interrupted(self) -> None:
        with (
            patch("subprocess.Popen") as popen,
            patch("serenity.main.run_ui", side_effect=KeyboardInterrupt),
        ):
            with pytest.raises(KeyboardInterrupt):
                run_separate()

        popen.return_value.terminate.assert_called_once_with()


class TestMain:
    @pytest.mark.parametrize(
        ("mode", "runner"),
        [("separate", "run_separate"), ("integrated", "run_integrated"), ("other", "run_integrated")],
    )
    def test_run_mode_selects_runner(self, mode: str, runner: str) -> None:
        with (
            patch.dict(os.environ, {"RUN_MODE": mode}),
            patch(f"serenity.main.{runner}") as chosen,
        ):
            main()

        chosen.assert_called_once_with()
