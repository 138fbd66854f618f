"""Shared helpers for the staging test suites."""

from __future__ import annotations

import dataclasses
from pathlib import Path

__all__ = ["RecordingPrepare", "write_classpath_inputs"]


@dataclasses.dataclass
class RecordingPrepare:
    """Staging collaborator that records calls and echoes a fixed result.

    Attributes
    ----------
    calls : list[tuple[list[str], str]]
        ``(paths, base_dir)`` pairs received, in call order.
    result : list[str] | None
        Value returned from every call; ``None`` echoes ``paths``.
    """

    calls: list[tuple[list[str], str]] = dataclasses.field(default_factory=list)
    result: list[str] | None = None

    def __call__(self, paths: list[str], base_dir: str) -> list[str]:
        self.calls.append((list(paths), base_dir))
        return list(paths) if self.result is None else self.result


def write_classpath_inputs(root: Path) -> dict[str, Path]:
    """Populate ``root`` with a jar, a class directory and a resource file.

    Parameters
    ----------
    root : Path
        Workspace directory to populate.

    Returns
    -------
    dict[str, Path]
        Mapping of ``"jar"``, ``"classes"`` and ``"resource"`` to the created
        paths.
    """
    jar = root / "lib" / "app.jar"
    jar.parent.mkdir(parents=True, exist_ok=True)
    jar.write_bytes(b"PK\x03\x04jar")

    classes = root / "classes"
    (classes / "pkg").mkdir(parents=True, exist_ok=True)
    (classes / "pkg" / "Main.class").write_bytes(b"\xca\xfe\xba\xbe")
    (classes / "settings.properties").write_text("key=value", encoding="utf-8")

    resource = root / "resource.txt"
    resource.write_text("payload", encoding="utf-8")
    return {"jar": jar, "classes": classes, "resource": resource}
