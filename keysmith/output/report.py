"""
Keysmith Report Generator
==========================

Machine-readable JSON output for every CLI command. Model fields are
serialised through their camelCase aliases (``entropyBits``,
``securityLevel``, ``isValid`` ...), the field names shared with the
other front ends of the engine.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence, Union

from pydantic import BaseModel

Payload = Union[BaseModel, Sequence[BaseModel], Sequence[str], dict[str, Any]]


def _dump(payload: Payload) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    if isinstance(payload, dict):
        return {k: _dump(v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [_dump(item) for item in payload]
    return payload


class KeysmithReportGenerator:
    """Builds JSON documents around command results.

    Usage::

        reporter = KeysmithReportGenerator(version="1.0.0")
        text = reporter.render_json("generate", results)
        reporter.generate_json("generate", results, Path("passwords.json"))
    """

    def __init__(self, version: str = "1.0.0") -> None:
        self.version = version

    def build(self, command: str, payload: Payload) -> dict[str, Any]:
        return {
            "reportMetadata": {
                "tool": "keysmith",
                "command": command,
                "version": self.version,
                "generatedAt": datetime.now(timezone.utc).isoformat(),
            },
            "results": _dump(payload),
        }

    def render_json(self, command: str, payload: Payload) -> str:
        return json.dumps(self.build(command, payload), indent=2, ensure_ascii=False)

    def generate_json(self, command: str, payload: Payload, output_path: Path) -> Path:
        """Write the report to *output_path*, creating parent directories.

        The file may contain generated secrets; it is created with the
        caller's umask and never logged.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(command, payload), encoding="utf-8")
        return output_path
