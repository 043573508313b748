# SPDX-License-Identifier: MIT
"""Command-line interface for sysinc.

The CLI runs a build script (``build.py`` or ``sysinc-build.py`` in the
current directory unless ``-b`` names one), then inspects the
projects it registered:

    sysinc info               list projects, binaries and configurations
    sysinc flags [TASK ...]   print the resolved compiler arguments
"""

from __future__ import annotations

import argparse
import logging
import runpy
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.errors import SysincError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sysinc.core.project import Project

logger = logging.getLogger("sysinc")

# Looked up in this order when no -b/--build-script is given
BUILD_SCRIPT_NAMES = ("build.py", "sysinc-build.py")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Send log records to stderr; --debug also shows the emitting module."""
    if debug:
        level, fmt = logging.DEBUG, "%(levelname)s: %(name)s: %(message)s"
    else:
        level = logging.INFO if verbose else logging.WARNING
        fmt = "%(levelname)s: %(message)s"
    logging.basicConfig(level=level, format=fmt)
    # basicConfig is a no-op once handlers exist; the level still applies
    logger.setLevel(level)


def find_script(
    directory: Path | None = None,
    names: Sequence[str] = BUILD_SCRIPT_NAMES,
) -> Path | None:
    """Return the first build script of ``names`` found in ``directory``.

    ``directory`` defaults to the current directory.
    """
    directory = directory or Path.cwd()
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def parse_variables(args: Sequence[str]) -> tuple[dict[str, str], list[str]]:
    """Split ``NAME=value`` build variables from the other arguments.

    Only names that are valid identifiers count as variables, so task
    names, options and stray ``=value`` arguments are left in place.

    Returns:
        (variables, remaining arguments)
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []
    for arg in args:
        name, sep, value = arg.partition("=")
        if sep and name.isidentifier():
            variables[name] = value
        else:
            remaining.append(arg)
    return variables, remaining


def load_projects(script: Path, variables: dict[str, str]) -> list[Project]:
    """Run a build script and return the projects it registered.

    ``variables`` are visible to the script through ``sysinc.get_var``
    while it runs and are dropped again afterwards.
    """
    import sysinc

    sysinc._clear_registered_projects()
    sysinc._set_build_vars(variables)
    logger.info("Running %s", script)
    try:
        runpy.run_path(str(script), run_name="__main__")
    finally:
        sysinc._set_build_vars(None)
    return sysinc.get_registered_projects()


def _resolve_script(args: argparse.Namespace) -> Path | None:
    if args.build_script:
        script = Path(args.build_script)
        if not script.is_file():
            logger.error("Build script not found: %s", script)
            return None
        return script

    found = find_script()
    if found is None:
        logger.error(
            "No build script (%s) in %s", ", ".join(BUILD_SCRIPT_NAMES), Path.cwd()
        )
    return found


def cmd_info(args: argparse.Namespace) -> int:
    """Show the projects, binaries and configurations of a build script."""
    setup_logging(args.verbose, args.debug)

    script = _resolve_script(args)
    if script is None:
        return 1
    variables, _ = parse_variables(args.extra)

    try:
        projects = load_projects(script, variables)
    except SysincError as e:
        logger.error("%s", e)
        return 1

    for project in projects:
        print(f"Project {project.name} ({project.root_dir})")
        for binary in project.binaries:
            print(f"  binary {binary.name} -> task {binary.compile_task.name}")
            for name in binary.outgoing:
                print(f"    exposes {name}")
        for config in project.configurations:
            parents = ", ".join(p.name for p in config.extends_from)
            print(f"  {config!r}")
            if config.description:
                print(f"    {config.description}")
            if parents:
                print(f"    extends {parents}")
    return 0


def cmd_flags(args: argparse.Namespace) -> int:
    """Print the resolved compiler arguments of compile tasks."""
    setup_logging(args.verbose, args.debug)

    script = _resolve_script(args)
    if script is None:
        return 1
    variables, tasks = parse_variables(args.extra)

    try:
        projects = load_projects(script, variables)
        for project in projects:
            for task in project.tasks:
                if tasks and task.name not in tasks:
                    continue
                print(f"{project.name}:{task.name}: {' '.join(task.compiler_args.resolve())}")
    except SysincError as e:
        logger.error("%s", e)
        return 1
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument("-b", "--build-script", help="Path to build.py script")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the sysinc CLI."""
    parser = argparse.ArgumentParser(
        prog="sysinc",
        description="Inspect system header wiring of native build projects.",
        epilog="Run 'sysinc <command> --help' for command-specific help.",
    )
    from sysinc import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # sysinc info
    info_parser = subparsers.add_parser(
        "info", help="Show projects, binaries and configurations"
    )
    add_common_args(info_parser)
    info_parser.add_argument(
        "extra", nargs="*", help="Build variables (KEY=value)"
    )
    info_parser.set_defaults(func=cmd_info)

    # sysinc flags
    flags_parser = subparsers.add_parser(
        "flags", help="Print resolved compiler arguments of compile tasks"
    )
    add_common_args(flags_parser)
    flags_parser.add_argument(
        "extra", nargs="*", help="Build variables (KEY=value) or task names"
    )
    flags_parser.set_defaults(func=cmd_flags)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
