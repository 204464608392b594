from __future__ import annotations

__all__ = [
    "__version__",
    "GENERATOR_VERSION",
    "CodegenError",
    "CodegenOptions",
    "ContainerRuntimeNotFoundError",
    "GeneratorNotFoundError",
    "SpecDocumentError",
    "ToolNotFoundError",
    "UnmatchedPatchError",
]

__version__ = "0.1.0"
GENERATOR_VERSION = "v4.2.2"

from .errors import (  # noqa: E402
    CodegenError,
    ContainerRuntimeNotFoundError,
    GeneratorNotFoundError,
    SpecDocumentError,
    ToolNotFoundError,
    UnmatchedPatchError,
)
from .options import CodegenOptions  # noqa: E402
