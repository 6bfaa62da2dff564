"""
entitygen_lib: A small library that scaffolds source files for one entity from a folder of
text templates with {{...}} placeholders.

Public API:
- derive_variables(entity_name: str) -> dict[str, str]
- render(text: str, variables: Mapping[str, str]) -> str
- extract_metadata(raw_text: str) -> tuple[TemplateMetadata, str]
- load_template(file_path: str) -> Template
- is_eligible(metadata: TemplateMetadata, requested_tags: Sequence[str] | None) -> bool
- generate(templates_dir: str, entity_name: str, base_dir: str, tags: Sequence[str] | None = None) -> GenerationResult
- load_settings(config_path: str | None = None, start_dir: str | None = None) -> Settings

The generator supports:
- Template files named like "model.template.py", found recursively under the templates folder.
- Metadata lines "// META: key=value" with keys output (required), description and tags.
- Four placeholders derived from the entity name: {{EntityName}}, {{entityName}},
  {{ENTITY_NAME}} and {{entity-name}}, in both the body and the output path.
- Opt-in tag filtering: with tags requested, only templates sharing at least one tag are rendered.
- Never overwriting: an output file that already exists is left alone and reported as skipped.
"""
from .config import ConfigError, Settings, load_settings
from .generator import GenerationError, GenerationResult, SkippedTemplate, SkipReason, discover_templates, generate
from .metadata import METADATA_PREFIX, Template, TemplateMetadata, extract_metadata, load_template
from .tags import is_eligible, split_tags
from .variables import VARIABLE_KEYS, derive_variables, render

__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
    "GenerationError",
    "GenerationResult",
    "SkippedTemplate",
    "SkipReason",
    "discover_templates",
    "generate",
    "METADATA_PREFIX",
    "Template",
    "TemplateMetadata",
    "extract_metadata",
    "load_template",
    "is_eligible",
    "split_tags",
    "VARIABLE_KEYS",
    "derive_variables",
    "render",
]
