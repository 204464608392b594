from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

# The Data Plane API spec does not mark these fields nullable, but an unset
# value must be distinguishable from the zero value.
BACKEND_OPTIONAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("DefaultServer", "DefaultServer"),
    ("Forwardfor", "Forwardfor"),
    ("HashType", "BackendHashType"),
    ("Httpchk", "Httpchk"),
    ("Redispatch", "Redispatch"),
    ("StickTable", "BackendStickTable"),
)

FRONTEND_OPTIONAL_FIELDS: tuple[tuple[str, str], ...] = (("Forwardfor", "Forwardfor"),)


@dataclass(frozen=True)
class PatchResult:
    path: Path
    applied: tuple[str, ...]
    unmatched: tuple[str, ...]

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def _rule_re(field_name: str, type_name: str) -> re.Pattern[str]:
    return re.compile(
        rf"^([ \t]*{re.escape(field_name)}[ \t]+)({re.escape(type_name)})\b",
        re.MULTILINE,
    )


def _rule_label(field_name: str, type_name: str) -> str:
    return f"{field_name} {type_name}"


def patch_text(text: str, rules: tuple[tuple[str, str], ...]) -> tuple[str, list[str], list[str]]:
    applied: list[str] = []
    unmatched: list[str] = []
    for field_name, type_name in rules:
        text, count = _rule_re(field_name, type_name).subn(r"\1*\2", text)
        if count:
            applied.append(_rule_label(field_name, type_name))
        else:
            unmatched.append(_rule_label(field_name, type_name))
    return text, applied, unmatched


def patch_file(path: Path, rules: tuple[tuple[str, str], ...]) -> PatchResult:
    if not path.is_file():
        raise FileNotFoundError(f"Missing generated model: {path}")
    original = path.read_text(encoding="utf-8")
    updated, applied, unmatched = patch_text(original, rules)
    if updated != original:
        path.write_text(updated, encoding="utf-8")
    return PatchResult(path=path, applied=tuple(applied), unmatched=tuple(unmatched))


def fix_backend_model(path: Path) -> PatchResult:
    return patch_file(path, BACKEND_OPTIONAL_FIELDS)


def fix_frontend_model(path: Path) -> PatchResult:
    return patch_file(path, FRONTEND_OPTIONAL_FIELDS)
