"""Export renderings of generated prompt content."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from .models import GeneratedArtifact

GENERATOR_NAME = "EchoPrompt"
GENERATOR_VERSION = "1.0.0"

EXPORT_FORMATS = {
    "txt": ("text/plain", "txt"),
    "json": ("application/json", "json"),
    "markdown": ("text/markdown", "md"),
    "csv": ("text/csv", "csv"),
}


def to_markdown(content: str) -> str:
    return f"# AI Prompt\n\n{content}\n\n---\n*Generated with {GENERATOR_NAME}*"


def to_json(content: str, metadata: Optional[Mapping[str, Any]] = None) -> str:
    payload = {
        "prompt": content,
        "metadata": {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "generator": GENERATOR_NAME,
            "version": GENERATOR_VERSION,
            **(metadata or {}),
        },
    }
    return json.dumps(payload, indent=2, default=str)


def to_table(content: str) -> str:
    """
    Render content as a two-column markdown table.

    Lines shaped like "Label: value" start a new section; other lines are
    attributed to the most recent section ("Main" before any label).
    """
    table = "| Section | Content |\n|---------|--------|\n"
    current_section = "Main"
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if ":" in line:
            section, _, rest = line.partition(":")
            current_section = section.strip() or current_section
            section_content = rest.strip()
            if section_content:
                table += f"| {current_section} | {section_content} |\n"
        else:
            table += f"| {current_section} | {stripped} |\n"
    return table


def to_csv(fields: Mapping[str, str], content: str) -> str:
    rows = ["Field,Value"]
    for key, value in fields.items():
        if value:
            rows.append(f'"{key}","{_escape_csv(value)}"')
    rows.append(f'"Generated Content","{_escape_csv(content)}"')
    return "\n".join(rows)


def export_artifact(artifact: GeneratedArtifact, fmt: str) -> Tuple[str, str, str]:
    """Return (body, mime type, filename) for an export format."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    mime_type, extension = EXPORT_FORMATS[fmt]
    filename = f"echoprompt-{artifact.id or 'draft'}.{extension}"

    if fmt == "txt":
        body = artifact.content
    elif fmt == "json":
        document = artifact.to_dict()
        body = to_json(
            artifact.content,
            {
                "id": artifact.id,
                "promptData": document["promptData"],
                "metadata": document["metadata"],
                "analytics": document["analytics"],
            },
        )
    elif fmt == "markdown":
        body = to_markdown(artifact.content)
    else:
        body = to_csv(artifact.fields.to_dict(), artifact.content)
    return body, mime_type, filename


def format_content(content: str, style: str) -> str:
    renderers: Dict[str, Any] = {"markdown": to_markdown, "json": to_json, "table": to_table}
    if style not in renderers:
        raise ValueError(f"Unsupported format: {style!r}")
    return renderers[style](content)


def _escape_csv(value: str) -> str:
    return value.replace('"', '""')
