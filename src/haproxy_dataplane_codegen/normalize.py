from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from .errors import ToolNotFoundError
from .options import CodegenOptions

LINTER_TARGET = "golangci-lint"


def goimports_command(linter: Path, target: Path) -> list[str]:
    return [
        str(linter),
        "run",
        "-v",
        "--no-config",
        "--fast=false",
        "--fix",
        "--disable-all",
        "--enable",
        "goimports",
        str(target),
    ]


def _require_tool(name: str, hint: str) -> str:
    exe = shutil.which(name)
    if exe is None:
        raise ToolNotFoundError(name, hint)
    return exe


def build_tools(options: CodegenOptions) -> Path:
    make = _require_tool("make", "install GNU make to build the tooling binaries")
    subprocess.run([make, "-C", str(options.tools_dir), LINTER_TARGET], check=True)
    linter = options.linter_path
    if not linter.exists():
        raise ToolNotFoundError(
            LINTER_TARGET,
            f"make -C {options.tools_dir} {LINTER_TARGET} did not produce {linter}; "
            "set GOLANGCI_LINT to an installed binary",
        )
    return linter


def ensure_linter(options: CodegenOptions) -> Path:
    linter = options.linter_path
    if linter.exists():
        return linter
    on_path = shutil.which(str(linter))
    if on_path is not None:
        return Path(on_path)
    print(f"[codegen] building {LINTER_TARGET} in {options.tools_dir}")
    return build_tools(options)


def normalize(target: Path, options: CodegenOptions) -> None:
    linter = ensure_linter(options)
    subprocess.run(goimports_command(linter, target), check=True)


def go_build(options: CodegenOptions) -> None:
    go = _require_tool("go", "install the Go toolchain (https://go.dev/doc/install)")
    subprocess.run([go, "build", "-v", str(options.output_dir)], check=True)
