from __future__ import annotations

import argparse
import dataclasses
import subprocess
import sys
from pathlib import Path
from typing import Callable, Mapping

from . import __version__, dedupe, generator, normalize, optional_fields, selector
from .errors import CodegenError, UnmatchedPatchError
from .optional_fields import PatchResult
from .options import CodegenOptions

PROG = "haproxy-dataplane-codegen"

Handler = Callable[[argparse.Namespace, CodegenOptions], int]

# (section, command, help); order is the order shown by `help`.
COMMANDS: list[tuple[str, str, str]] = [
    ("Help", "help", "Display this help"),
    ("Tooling Binaries", "tools", "Build tooling binaries"),
    ("Build", "build", "Builds the HAProxy dataplane API client bindings"),
    ("Generate", "generate", "Generates the HAProxy dataplane API client bindings (auto)"),
    ("Generate", "generate-with-binary", "Generates the HAProxy dataplane API client bindings (binary)"),
    ("Generate", "generate-with-docker", "Generates the HAProxy dataplane API client bindings (docker)"),
    ("Generate", "remove-dupe-opts", "Removes duplicate Opt structs from the generated code"),
    ("Generate", "fix-backend-model", "Makes optional fields in the backend model into pointers"),
    ("Generate", "fix-frontend-model", "Makes optional fields in the frontend model into pointers"),
    ("Cleanup / Verification", "clean", "Run all the clean targets"),
    ("Cleanup / Verification", "verify", "Verifies the HAProxy dataplane spec file (auto)"),
    ("Cleanup / Verification", "verify-with-binary", "Verifies the HAProxy dataplane API spec file (binary)"),
    ("Cleanup / Verification", "verify-with-docker", "Verifies the HAProxy dataplane spec file (docker)"),
    ("Cleanup / Verification", "report", "Summarizes the HAProxy dataplane API spec file"),
]

_PATCH_COMMANDS = {"generate", "fix-backend-model", "fix-frontend-model"}


def render_help() -> str:
    lines = ["", "Usage:", f"  {PROG} <command>"]
    section = None
    for name, command, text in COMMANDS:
        if name != section:
            lines.append("")
            lines.append(name)
            section = name
        lines.append(f"  {command:<22} {text}")
    return "\n".join(lines) + "\n"


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--swagger-json", type=Path, help="OpenAPI spec file (env: SWAGGER_JSON)")
    p.add_argument("--output-dir", type=Path, help="Generated client directory (env: OUTPUT_DIR)")
    p.add_argument("--template-dir", type=Path, help="Generator template overrides (env: TEMPLATE_DIR)")
    p.add_argument("--generator-bin", help="openapi-generator executable (env: OPENAPI_GENERATOR_BIN)")
    p.add_argument("--generator-image", help="openapi-generator image (env: OPENAPI_GENERATOR_IMG)")
    p.add_argument("--tools-dir", type=Path, help="Tooling directory (env: TOOLS_DIR)")
    p.add_argument("--golangci-lint", type=Path, help="golangci-lint executable (env: GOLANGCI_LINT)")


def _options_from_args(args: argparse.Namespace, environ: Mapping[str, str] | None) -> CodegenOptions:
    options = CodegenOptions.from_env(environ)
    overrides = {
        "swagger_json": args.swagger_json,
        "output_dir": args.output_dir,
        "template_dir": args.template_dir,
        "generator_bin": args.generator_bin,
        "generator_image": args.generator_image,
        "tools_dir": args.tools_dir,
        "golangci_lint": args.golangci_lint,
    }
    return dataclasses.replace(options, **{k: v for k, v in overrides.items() if v is not None})


def _remove_dupe_opts(args: argparse.Namespace, options: CodegenOptions) -> int:
    report = dedupe.remove_duplicate_structs(options.output_dir)
    if report.removed:
        print(f"[codegen] removed {len(report.removed)} duplicate Opts struct(s)")
    normalize.normalize(options.output_dir, options)
    return 0


def _fix_model(path: Path, fixer: Callable[[Path], PatchResult], *, strict: bool, options: CodegenOptions) -> int:
    result = fixer(path)
    for label in result.applied:
        print(f"[codegen] {path}: {label} -> pointer")
    if result.unmatched:
        if strict:
            raise UnmatchedPatchError(str(path), list(result.unmatched))
        for label in result.unmatched:
            print(f"warning: {path}: no field declaration matching '{label}'", file=sys.stderr)
    normalize.normalize(path, options)
    return 0


def _fix_backend_model(args: argparse.Namespace, options: CodegenOptions) -> int:
    return _fix_model(
        options.backend_model, optional_fields.fix_backend_model, strict=args.strict, options=options
    )


def _fix_frontend_model(args: argparse.Namespace, options: CodegenOptions) -> int:
    return _fix_model(
        options.frontend_model, optional_fields.fix_frontend_model, strict=args.strict, options=options
    )


def _generate(args: argparse.Namespace, options: CodegenOptions) -> int:
    generator.generate(options, mode=selector.select_mode(options))
    _remove_dupe_opts(args, options)
    _fix_backend_model(args, options)
    _fix_frontend_model(args, options)
    return 0


def _generate_with_binary(args: argparse.Namespace, options: CodegenOptions) -> int:
    generator.generate_with_binary(options)
    return 0


def _generate_with_docker(args: argparse.Namespace, options: CodegenOptions) -> int:
    generator.generate_with_docker(options)
    return 0


def _verify(args: argparse.Namespace, options: CodegenOptions) -> int:
    generator.verify(options, mode=selector.select_mode(options))
    return 0


def _verify_with_binary(args: argparse.Namespace, options: CodegenOptions) -> int:
    generator.verify_with_binary(options)
    return 0


def _verify_with_docker(args: argparse.Namespace, options: CodegenOptions) -> int:
    generator.verify_with_docker(options)
    return 0


def _clean(args: argparse.Namespace, options: CodegenOptions) -> int:
    if generator.clean(options):
        print(f"[codegen] removed {options.output_dir}")
    return 0


def _tools(args: argparse.Namespace, options: CodegenOptions) -> int:
    normalize.build_tools(options)
    return 0


def _build(args: argparse.Namespace, options: CodegenOptions) -> int:
    normalize.go_build(options)
    return 0


def _report(args: argparse.Namespace, options: CodegenOptions) -> int:
    # Avoid importing ruamel.yaml for the subprocess-only commands.
    from .report import report

    text = report(options.swagger_json)
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
        sys.stdout.write(f"Wrote report: {args.out}\n")
    else:
        sys.stdout.write(text)
    return 0


def _help(args: argparse.Namespace, options: CodegenOptions) -> int:
    sys.stdout.write(render_help())
    return 0


HANDLERS: dict[str, Handler] = {
    "help": _help,
    "tools": _tools,
    "build": _build,
    "generate": _generate,
    "generate-with-binary": _generate_with_binary,
    "generate-with-docker": _generate_with_docker,
    "remove-dupe-opts": _remove_dupe_opts,
    "fix-backend-model": _fix_backend_model,
    "fix-frontend-model": _fix_frontend_model,
    "clean": _clean,
    "verify": _verify,
    "verify-with-binary": _verify_with_binary,
    "verify-with-docker": _verify_with_docker,
    "report": _report,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="HAProxy Data Plane API client codegen")
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    sub = parser.add_subparsers(dest="command")

    for _, command, text in COMMANDS:
        p = sub.add_parser(command, help=text)
        _add_common_flags(p)
        if command in _PATCH_COMMANDS:
            p.add_argument("--strict", action="store_true", help="Fail when a field patch no longer matches")
        if command == "report":
            p.add_argument("--out", type=str, help="Write report to file instead of stdout")
    return parser


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        sys.stdout.write(render_help())
        return 0

    options = _options_from_args(args, environ)
    try:
        return HANDLERS[args.command](args, options)
    except CodegenError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except subprocess.CalledProcessError as exc:
        cmd = exc.cmd if isinstance(exc.cmd, str) else " ".join(str(part) for part in exc.cmd)
        print(f"{cmd} failed with exit code {exc.returncode}", file=sys.stderr)
        return exc.returncode if exc.returncode > 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
