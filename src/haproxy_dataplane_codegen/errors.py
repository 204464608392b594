from __future__ import annotations

INSTALL_DOCS_URL = "https://openapi-generator.tech/docs/installation.html"
DOCKER_DOCS_URL = "https://docs.docker.com/get-docker/"


class CodegenError(RuntimeError):
    pass


class GeneratorNotFoundError(CodegenError):
    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "\n".join(
                [
                    "openapi-generator is required",
                    " * use the analogous docker target, or...",
                    f" * install the openapi-generator binary ({INSTALL_DOCS_URL})",
                ]
            )
        super().__init__(message)


class ContainerRuntimeNotFoundError(CodegenError):
    def __init__(self, runtime: str = "docker") -> None:
        self.runtime = runtime
        super().__init__(
            "\n".join(
                [
                    f"neither openapi-generator nor {runtime} is available",
                    f" * install the openapi-generator binary ({INSTALL_DOCS_URL}), or...",
                    f" * install {runtime} ({DOCKER_DOCS_URL}) to use the containerized generator",
                ]
            )
        )


class UnmatchedPatchError(CodegenError):
    def __init__(self, path: str, unmatched: list[str]) -> None:
        self.path = path
        self.unmatched = list(unmatched)
        super().__init__(f"{path}: no match for {', '.join(self.unmatched)}")


class SpecDocumentError(CodegenError):
    pass


class ToolNotFoundError(CodegenError):
    def __init__(self, tool: str, hint: str) -> None:
        self.tool = tool
        super().__init__(f"{tool} is required\n * {hint}")
