import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .metadata import Template, load_template
from .tags import is_eligible
from .variables import derive_variables, render

logger = logging.getLogger(__name__)

TEMPLATE_MARKER = ".template."


class GenerationError(Exception):
    """Raised when a run cannot start: missing templates directory or no templates."""


class SkipReason(enum.Enum):
    MISSING_OUTPUT = "missing output"
    TAG_MISMATCH = "tag mismatch"
    ALREADY_EXISTS = "already exists"
    OUTSIDE_BASE_DIR = "outside base directory"
    ERROR = "error"


@dataclass(frozen=True)
class SkippedTemplate:
    template_path: str
    reason: SkipReason
    detail: str = ""


@dataclass
class GenerationResult:
    entity_name: str
    generated: List[str] = field(default_factory=list)
    skipped: List[SkippedTemplate] = field(default_factory=list)

    @property
    def generated_count(self) -> int:
        return len(self.generated)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def skipped_for(self, reason: SkipReason) -> List[SkippedTemplate]:
        return [s for s in self.skipped if s.reason is reason]


def is_template_file(file_name: str) -> bool:
    # "model.template.py" qualifies, "model.template" and "template.py" do not
    return TEMPLATE_MARKER in file_name and not file_name.endswith(TEMPLATE_MARKER)


def discover_templates(templates_dir: str) -> List[str]:
    """Recursively list template files under templates_dir, sorted by path."""
    found: List[str] = []
    for root, dirs, files in os.walk(templates_dir):
        dirs.sort()
        for name in files:
            full_path = os.path.join(root, name)
            if is_template_file(name) and os.path.isfile(full_path):
                found.append(full_path)
    return sorted(found)


def _resolve_output_path(base_dir: str, output: str) -> Optional[str]:
    # None when the output would land outside base_dir
    base = os.path.abspath(base_dir)
    target = os.path.abspath(os.path.join(base, output))
    try:
        if os.path.commonpath([base, target]) != base:
            return None
    except ValueError:
        # Different drives on Windows
        return None
    return target


def _skip_existing(template_path: str, output_path: str, result: GenerationResult) -> None:
    logger.info("File %s already exists. Skipping.", output_path)
    result.skipped.append(SkippedTemplate(template_path, SkipReason.ALREADY_EXISTS, output_path))


def _process_template(
    template_path: str,
    variables: Dict[str, str],
    base_dir: str,
    tags: Optional[Sequence[str]],
    result: GenerationResult,
) -> None:
    template: Template = load_template(template_path)
    name = os.path.basename(template_path)

    if not template.metadata.is_valid:
        logger.info("Template %s does not have 'output' metadata. Skipping.", name)
        result.skipped.append(SkippedTemplate(template_path, SkipReason.MISSING_OUTPUT))
        return

    if tags and not is_eligible(template.metadata, tags):
        logger.info("Template %s does not match tags %s. Skipping.", name, ", ".join(tags))
        result.skipped.append(SkippedTemplate(template_path, SkipReason.TAG_MISMATCH))
        return

    content = render(template.body, variables)
    output = render(template.metadata.output or "", variables)
    output_path = _resolve_output_path(base_dir, output)

    if output_path is None:
        logger.warning("Template %s output %s escapes %s. Skipping.", name, output, base_dir)
        result.skipped.append(SkippedTemplate(template_path, SkipReason.OUTSIDE_BASE_DIR, output))
        return

    if os.path.lexists(output_path):
        _skip_existing(template_path, output_path, result)
        return

    dir_path = os.path.dirname(output_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    # "x" never replaces a file that appeared after the check above, nor follows a dangling symlink
    try:
        with open(output_path, "x", encoding="utf-8", newline="") as f:
            f.write(content)
    except FileExistsError:
        _skip_existing(template_path, output_path, result)
        return

    logger.info("File generated: %s", output_path)
    result.generated.append(output_path)


def generate(
    templates_dir: str,
    entity_name: str,
    base_dir: str,
    tags: Optional[Sequence[str]] = None,
) -> GenerationResult:
    """
    Render every template found under templates_dir for entity_name into base_dir.

    - Raises GenerationError if templates_dir is missing or holds no templates.
    - The variable set is derived once and shared by all templates.
    - Templates without 'output', templates filtered out by tags, and templates whose
      output already exists are skipped. Existing files are never modified.
    - Any other failure while handling one template is logged and counted as a skip;
      the remaining templates are still processed.
    """
    if not os.path.isdir(templates_dir):
        raise GenerationError(f"Templates directory not found: {templates_dir}")

    template_files = discover_templates(templates_dir)
    if not template_files:
        raise GenerationError(f"No templates found in {templates_dir}")

    logger.info("Generating code for entity: %s", entity_name)

    variables = derive_variables(entity_name)
    result = GenerationResult(entity_name=entity_name)

    for template_path in template_files:
        try:
            _process_template(template_path, variables, base_dir, tags, result)
        except Exception as e:
            logger.error("Error processing template %s: %s", os.path.basename(template_path), e)
            result.skipped.append(SkippedTemplate(template_path, SkipReason.ERROR, str(e)))

    logger.info(
        "Generation completed: %d generated, %d skipped.",
        result.generated_count,
        result.skipped_count,
    )
    return result
