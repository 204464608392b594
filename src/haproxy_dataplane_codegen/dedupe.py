from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .goscan import GoScanError, TypeDecl, find_type_decls, remove_spans

# openapi-generator can emit the same optional-parameter struct in several
# files: https://github.com/OpenAPITools/openapi-generator/issues/741
TRACKED_SUFFIX = "Opts"


@dataclass
class DedupeReport:
    counts: dict[str, int] = field(default_factory=dict)
    kept: dict[str, Path] = field(default_factory=dict)
    removed: list[tuple[str, Path]] = field(default_factory=list)

    @property
    def changed_files(self) -> list[Path]:
        return sorted({path for _, path in self.removed})


def iter_go_files(output_dir: Path) -> list[Path]:
    return sorted(path for path in output_dir.glob("*.go") if path.is_file())


def _scan(path: Path) -> tuple[str, list[TypeDecl]]:
    try:
        source = path.read_text(encoding="utf-8")
        return source, find_type_decls(source)
    except UnicodeDecodeError as exc:
        raise GoScanError(f"{path}: not valid UTF-8: {exc}") from exc
    except GoScanError as exc:
        raise GoScanError(f"{path}: {exc}") from exc


def _tracked_structs(decls: Iterable[TypeDecl], suffix: str) -> list[TypeDecl]:
    return [d for d in decls if d.kind == "struct" and d.name.endswith(suffix)]


def count_struct_names(files: Iterable[Path], *, suffix: str = TRACKED_SUFFIX) -> Counter[str]:
    counts: Counter[str] = Counter()
    for path in files:
        _, decls = _scan(path)
        counts.update(d.name for d in _tracked_structs(decls, suffix))
    return counts


def remove_duplicate_structs(output_dir: Path, *, suffix: str = TRACKED_SUFFIX) -> DedupeReport:
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Missing output directory: {output_dir}")

    files = iter_go_files(output_dir)
    counts = count_struct_names(files, suffix=suffix)
    report = DedupeReport(counts={name: n for name, n in sorted(counts.items()) if n > 1})
    if not report.counts:
        return report

    for path in files:
        source, decls = _scan(path)
        spans: list[tuple[int, int]] = []
        for decl in _tracked_structs(decls, suffix):
            if decl.name not in report.counts:
                continue
            if decl.name not in report.kept:
                print(f"skipping first appearance of {decl.name} in file {path}")
                report.kept[decl.name] = path
                continue
            print(f"removing dupe {decl.name} from file {path}")
            spans.append((decl.start, decl.end))
            report.removed.append((decl.name, path))
        if spans:
            path.write_text(remove_spans(source, spans), encoding="utf-8")

    return report
