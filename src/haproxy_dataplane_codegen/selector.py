from __future__ import annotations

import shutil
from typing import Literal

from .errors import GeneratorNotFoundError
from .options import CodegenOptions

GENERATOR_COMMAND = "openapi-generator"

Mode = Literal["binary", "docker"]


def resolve_generator_bin(explicit: str | None = None) -> str | None:
    """
    Locate a usable openapi-generator executable.

    An explicit value may be a path or a command name; either way it must
    resolve to an executable, otherwise the generator counts as absent.
    """

    candidate = explicit if explicit else GENERATOR_COMMAND
    return shutil.which(candidate)


def select_mode(options: CodegenOptions) -> Mode:
    if resolve_generator_bin(options.generator_bin):
        return "binary"
    return "docker"


def require_generator_bin(options: CodegenOptions) -> str:
    exe = resolve_generator_bin(options.generator_bin)
    if exe is None:
        raise GeneratorNotFoundError()
    return exe
