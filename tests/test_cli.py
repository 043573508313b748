# SPDX-License-Identifier: MIT
"""Tests for sysinc CLI."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

import sysinc
from sysinc.cli import find_script, load_projects, main, parse_variables, setup_logging

BUILD_SCRIPT = """
from pathlib import Path

from sysinc import Project, SystemIncludes, publish_system_headers
from sysinc.toolchains import GccToolchain

root = Path(__file__).parent
system = Project("system", root_dir=root / "system")
publish_system_headers(system, "include", "include.version")

app = Project("app", root_dir=root / "app")
app.implementation.add_dependency(app.dependency(system))
SystemIncludes().apply(app)
app.Binary("mainDebug", GccToolchain(), debuggable=True)
"""


@pytest.fixture
def build_script(tmp_path: Path) -> Path:
    (tmp_path / "system" / "include").mkdir(parents=True)
    (tmp_path / "system" / "include.version").write_text("1")
    script = tmp_path / "build.py"
    script.write_text(BUILD_SCRIPT)
    return script


class TestFindScript:
    """Tests for find_script function."""

    def test_find_existing_script(self, tmp_path: Path) -> None:
        """Test finding an existing script."""
        script = tmp_path / "build.py"
        script.write_text("# test script")

        assert find_script(tmp_path) == script

    def test_alternative_name(self, tmp_path: Path) -> None:
        script = tmp_path / "sysinc-build.py"
        script.write_text("")
        assert find_script(tmp_path) == script

    def test_build_py_first(self, tmp_path: Path) -> None:
        (tmp_path / "sysinc-build.py").write_text("")
        (tmp_path / "build.py").write_text("")
        assert find_script(tmp_path) == tmp_path / "build.py"

    def test_script_not_found(self, tmp_path: Path) -> None:
        assert find_script(tmp_path) is None

    def test_find_script_ignores_directories(self, tmp_path: Path) -> None:
        (tmp_path / "build.py").mkdir()
        assert find_script(tmp_path) is None


class TestParseVariables:
    def test_split(self) -> None:
        variables, rest = parse_variables(["SYSINC_RELATIVIZE=0", "compileDebugCpp"])
        assert variables == {"SYSINC_RELATIVIZE": "0"}
        assert rest == ["compileDebugCpp"]

    def test_value_with_equals(self) -> None:
        variables, _ = parse_variables(["DEFINE=A=B"])
        assert variables == {"DEFINE": "A=B"}

    def test_empty_value(self) -> None:
        variables, _ = parse_variables(["SYSINC_RELATIVIZE="])
        assert variables == {"SYSINC_RELATIVIZE": ""}

    @pytest.mark.parametrize("arg", ["=value", "-Dx=1", "not-a-name=1"])
    def test_not_a_variable(self, arg: str) -> None:
        variables, rest = parse_variables([arg])
        assert variables == {}
        assert rest == [arg]


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_levels(self) -> None:
        setup_logging(verbose=False, debug=False)
        assert logging.getLogger("sysinc").level == logging.WARNING
        setup_logging(verbose=True, debug=False)
        assert logging.getLogger("sysinc").level == logging.INFO
        setup_logging(verbose=False, debug=True)
        assert logging.getLogger("sysinc").level == logging.DEBUG


class TestLoadProjects:
    def test_registers_projects(self, build_script: Path) -> None:
        projects = load_projects(build_script, {})
        assert [p.name for p in projects] == ["system", "app"]
        assert projects == sysinc.get_registered_projects()

    def test_clears_previous_projects(self, build_script: Path) -> None:
        load_projects(build_script, {})
        projects = load_projects(build_script, {})
        assert len(projects) == 2

    def test_variables(self, build_script: Path) -> None:
        projects = load_projects(build_script, {"SYSINC_RELATIVIZE": "0"})
        app = projects[1]
        args = app.tasks.named("compileDebugCpp").compiler_args.resolve()
        assert args == ["-I", str(build_script.parent / "system" / "include")]

    def test_variables_do_not_leak(self, build_script: Path) -> None:
        load_projects(build_script, {"SYSINC_RELATIVIZE": "0"})
        assert "SYSINC_VARS" not in os.environ
        assert sysinc.get_var("SYSINC_RELATIVIZE") is None

        projects = load_projects(build_script, {})
        args = projects[1].tasks.named("compileDebugCpp").compiler_args.resolve()
        assert not os.path.isabs(args[1])

    def test_variables_dropped_after_failure(self, build_script: Path) -> None:
        build_script.write_text("raise RuntimeError('broken')\n")
        with pytest.raises(RuntimeError):
            load_projects(build_script, {"SYSINC_RELATIVIZE": "0"})
        assert sysinc.get_var("SYSINC_RELATIVIZE") is None


class TestCommands:
    def test_info(self, build_script: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["info", "-b", str(build_script)]) == 0
        out = capsys.readouterr().out
        assert "Project app" in out
        assert "binary mainDebug -> task compileDebugCpp" in out
        assert "exposes debugSystemHeadersElements" in out
        assert "debugSystemVersions" in out

    def test_flags(self, build_script: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["flags", "-b", str(build_script), "compileDebugCpp"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("app:compileDebugCpp: -I ")

    def test_flags_resolution_failure(
        self, build_script: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (build_script.parent / "build.py").write_text(
            BUILD_SCRIPT.replace(
                'publish_system_headers(system, "include", "include.version")', ""
            )
        )
        assert main(["flags", "-b", str(build_script)]) == 1

    def test_missing_script(self, tmp_path: Path) -> None:
        assert main(["info", "-b", str(tmp_path / "missing.py")]) == 1

    def test_no_command(self) -> None:
        assert main([]) == 1

    def test_version(self) -> None:
        """Test sysinc --version."""
        result = subprocess.run(
            [sys.executable, "-m", "sysinc.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert sysinc.__version__ in result.stdout
