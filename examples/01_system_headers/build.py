#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""Example wiring a vendored system header tree into an application.

This example shows:
- A vendor project ("system") publishing include/ and its version marker
- An application depending on it once, in implementation scope
- Debug and release binaries picking the headers up as relative -I flags

Variables:
    SYSINC_RELATIVIZE - 0 to emit absolute include paths (default: 1)

Run with:
    sysinc flags -b examples/01_system_headers/build.py
"""

from pathlib import Path

from sysinc import Project, SystemIncludes, publish_system_headers
from sysinc.toolchains import GccToolchain

root = Path(__file__).parent

system = Project("system", root_dir=root / "system")
publish_system_headers(system, "include", "include.version")

app = Project("app", root_dir=root / "app")
app.implementation.add_dependency(app.dependency(system))
SystemIncludes().apply(app)

toolchain = GccToolchain()
app.Binary("mainDebug", toolchain, debuggable=True)
app.Binary("mainRelease", toolchain, optimized=True)

if __name__ == "__main__":
    for task in app.tasks:
        print(f"{task.name}: {' '.join(task.compiler_args.resolve())}")
