from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .metadata import TemplateMetadata


def split_tags(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated tag list, trimming each piece and dropping empty ones.

    Example: " entity, model,,service " -> ["entity", "model", "service"]
    """
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def is_eligible(metadata: "TemplateMetadata", requested_tags: Optional[Sequence[str]]) -> bool:
    """
    Decide whether a template takes part in a run filtered by requested_tags.

    - No requested tags (None or empty): every template is eligible.
    - Template without tags: never eligible while a filter is active.
    - Otherwise eligible if any template tag equals any requested tag, ignoring case.
    """
    if not requested_tags:
        return True
    if not metadata.tags:
        return False
    wanted = {t.casefold() for t in requested_tags}
    return any(t.casefold() in wanted for t in metadata.tags)
