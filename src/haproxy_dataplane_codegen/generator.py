from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from .errors import ContainerRuntimeNotFoundError
from .options import FILES_TO_DELETE_POST_GEN, CodegenOptions
from .selector import Mode, require_generator_bin

CONTAINER_SPEC_PATH = "/openapi/swagger.json"
CONTAINER_OUTPUT_DIR = "/openapi/output"
CONTAINER_TEMPLATE_DIR = "/openapi/generator-template"


def _run(cmd: list[str]) -> None:
    subprocess.run(cmd, check=True)


def _require_spec(options: CodegenOptions) -> Path:
    if not options.swagger_json.is_file():
        raise FileNotFoundError(f"Missing OpenAPI spec: {options.swagger_json}")
    return options.swagger_json


def _require_container_runtime(options: CodegenOptions) -> str:
    exe = shutil.which(options.container_runtime)
    if exe is None:
        raise ContainerRuntimeNotFoundError(options.container_runtime)
    return exe


def binary_generate_command(exe: str, options: CodegenOptions) -> list[str]:
    return [
        exe,
        "generate",
        "--input-spec",
        str(options.swagger_json),
        "--generator-name",
        "go",
        "-t",
        str(options.template_dir),
        "--output",
        str(options.output_dir),
    ]


def docker_generate_command(runtime: str, options: CodegenOptions) -> list[str]:
    vol_opts = options.volume_opts
    return [
        runtime,
        "run",
        "--rm",
        "-v",
        f"{options.swagger_json.resolve()}:{CONTAINER_SPEC_PATH}:ro",
        "-v",
        f"{options.output_dir.resolve()}:{CONTAINER_OUTPUT_DIR}{vol_opts}",
        "-v",
        f"{options.template_dir.resolve()}:{CONTAINER_TEMPLATE_DIR}{vol_opts}",
        options.generator_image,
        "generate",
        "--input-spec",
        CONTAINER_SPEC_PATH,
        "--generator-name",
        "go",
        "-t",
        CONTAINER_TEMPLATE_DIR,
        "--output",
        CONTAINER_OUTPUT_DIR,
    ]


def binary_validate_command(exe: str, options: CodegenOptions) -> list[str]:
    return [exe, "validate", "--input-spec", str(options.swagger_json)]


def docker_validate_command(runtime: str, options: CodegenOptions) -> list[str]:
    return [
        runtime,
        "run",
        "--rm",
        "-v",
        f"{options.swagger_json.resolve()}:{CONTAINER_SPEC_PATH}:ro",
        options.generator_image,
        "validate",
        "--input-spec",
        CONTAINER_SPEC_PATH,
    ]


def remove_post_gen_files(output_dir: Path) -> list[Path]:
    removed: list[Path] = []
    for name in FILES_TO_DELETE_POST_GEN:
        path = output_dir / name
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
        else:
            continue
        removed.append(path)
    return removed


def generate_with_binary(options: CodegenOptions) -> None:
    exe = require_generator_bin(options)
    _require_spec(options)
    print(f"[codegen] {options.swagger_json} -> {options.output_dir} (binary: {exe})")
    _run(binary_generate_command(exe, options))
    remove_post_gen_files(options.output_dir)


def generate_with_docker(options: CodegenOptions) -> None:
    _require_spec(options)
    runtime = _require_container_runtime(options)
    options.output_dir.mkdir(parents=True, exist_ok=True)
    print(f"[codegen] {options.swagger_json} -> {options.output_dir} (image: {options.generator_image})")
    _run(docker_generate_command(runtime, options))
    remove_post_gen_files(options.output_dir)


def verify_with_binary(options: CodegenOptions) -> None:
    exe = require_generator_bin(options)
    _require_spec(options)
    _run(binary_validate_command(exe, options))


def verify_with_docker(options: CodegenOptions) -> None:
    _require_spec(options)
    runtime = _require_container_runtime(options)
    _run(docker_validate_command(runtime, options))


def generate(options: CodegenOptions, *, mode: Mode) -> None:
    if mode == "binary":
        generate_with_binary(options)
    else:
        generate_with_docker(options)


def verify(options: CodegenOptions, *, mode: Mode) -> None:
    if mode == "binary":
        verify_with_binary(options)
    else:
        verify_with_docker(options)


def clean(options: CodegenOptions) -> bool:
    if not options.output_dir.exists():
        return False
    shutil.rmtree(options.output_dir)
    return True
