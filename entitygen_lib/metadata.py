import enum
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .tags import split_tags

logger = logging.getLogger(__name__)

METADATA_PREFIX = "// META:"


class MetadataKey(enum.Enum):
    OUTPUT = "output"
    DESCRIPTION = "description"
    TAGS = "tags"


@dataclass(frozen=True)
class TemplateMetadata:
    output: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        # A template is only usable when it says where its output goes
        return bool(self.output and self.output.strip())


@dataclass(frozen=True)
class Template:
    file_path: str
    body: str
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)


def is_metadata_line(line: str) -> bool:
    return line.strip().startswith(METADATA_PREFIX)


def _parse_declaration(line: str) -> Optional[Tuple[str, str]]:
    content = line.strip()[len(METADATA_PREFIX):].strip()
    if "=" not in content:
        return None
    key, value = content.split("=", 1)
    return key.strip().lower(), value.strip()


def extract_metadata(raw_text: str) -> Tuple[TemplateMetadata, str]:
    """
    Split raw template text into its metadata and its body.

    Metadata lines look like:
      // META: output=src/{{EntityName}}.py
      // META: description=Model class
      // META: tags=entity, model

    Every line starting with the marker (after trimming) is removed from the body,
    including malformed lines without "=" and lines with unknown keys. Keys are
    case-insensitive; values are kept literally. The remaining lines are joined
    back with newlines and the whole body is trimmed.
    """
    output: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    body_lines: List[str] = []

    for line in (raw_text or "").split("\n"):
        if not is_metadata_line(line):
            body_lines.append(line)
            continue

        parsed = _parse_declaration(line)
        if parsed is None:
            logger.debug("Ignoring malformed metadata line: %r", line.strip())
            continue
        raw_key, value = parsed
        try:
            key = MetadataKey(raw_key)
        except ValueError:
            logger.debug("Ignoring unknown metadata key: %r", raw_key)
            continue

        if key is MetadataKey.OUTPUT:
            output = value
        elif key is MetadataKey.DESCRIPTION:
            description = value
        elif key is MetadataKey.TAGS:
            tags = split_tags(value)

    metadata = TemplateMetadata(output=output, description=description, tags=tuple(tags))
    body = "\n".join(body_lines).strip()
    return metadata, body


def load_template(file_path: str) -> Template:
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Template not found: {file_path}")
    # utf-8-sig drops a leading BOM; newline="" keeps \r\n line endings as written
    with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
        text = f.read()
    metadata, body = extract_metadata(text)
    return Template(file_path=file_path, body=body, metadata=metadata)
