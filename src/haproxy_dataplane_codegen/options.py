from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from . import GENERATOR_VERSION

DEFAULT_SWAGGER_JSON = "haproxy-dataplaneapi-1.2.json"
DEFAULT_OUTPUT_DIR = "./openapi"
DEFAULT_TEMPLATE_DIR = "./generator-template"
DEFAULT_TOOLS_DIR = "../../hack/tools"
DEFAULT_GENERATOR_IMAGE = f"openapitools/openapi-generator-cli:{GENERATOR_VERSION}"
DEFAULT_CONTAINER_RUNTIME = "docker"

SELINUX_ENFORCE_PATH = Path("/sys/fs/selinux/enforce")

# Removed from the output directory after the client bindings are generated.
FILES_TO_DELETE_POST_GEN = ("go.mod", "go.sum", ".travis.yml", "git_push.sh")


def selinux_enabled(enforce_path: Path = SELINUX_ENFORCE_PATH) -> bool:
    try:
        return enforce_path.read_text(encoding="utf-8").strip() == "1"
    except OSError:
        return False


def _default_volume_opts(environ: Mapping[str, str], enforce_path: Path) -> str:
    if "DOCKER_VOL_OPTS" in environ:
        return environ["DOCKER_VOL_OPTS"]
    # Hosts running SELinux need :z added to volume mounts.
    return ":z" if selinux_enabled(enforce_path) else ""


@dataclass(frozen=True)
class CodegenOptions:
    swagger_json: Path = Path(DEFAULT_SWAGGER_JSON)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    template_dir: Path = Path(DEFAULT_TEMPLATE_DIR)
    generator_bin: str | None = None
    generator_image: str = DEFAULT_GENERATOR_IMAGE
    container_runtime: str = DEFAULT_CONTAINER_RUNTIME
    volume_opts: str = ""
    tools_dir: Path = Path(DEFAULT_TOOLS_DIR)
    golangci_lint: Path | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        selinux_enforce_path: Path = SELINUX_ENFORCE_PATH,
    ) -> "CodegenOptions":
        env = os.environ if environ is None else environ
        golangci_lint = env.get("GOLANGCI_LINT")
        return cls(
            swagger_json=Path(env.get("SWAGGER_JSON") or DEFAULT_SWAGGER_JSON),
            output_dir=Path(env.get("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
            template_dir=Path(env.get("TEMPLATE_DIR") or DEFAULT_TEMPLATE_DIR),
            generator_bin=env.get("OPENAPI_GENERATOR_BIN") or None,
            generator_image=env.get("OPENAPI_GENERATOR_IMG") or DEFAULT_GENERATOR_IMAGE,
            volume_opts=_default_volume_opts(env, selinux_enforce_path),
            tools_dir=Path(env.get("TOOLS_DIR") or DEFAULT_TOOLS_DIR),
            golangci_lint=Path(golangci_lint) if golangci_lint else None,
        )

    @property
    def linter_path(self) -> Path:
        if self.golangci_lint is not None:
            return self.golangci_lint
        return self.tools_dir / "bin" / "golangci-lint"

    @property
    def backend_model(self) -> Path:
        return self.output_dir / "model_backend.go"

    @property
    def frontend_model(self) -> Path:
        return self.output_dir / "model_frontend.go"
