from typing import Optional, Protocol

from .exceptions import MissingTemplateError


class TemplateRegistry(Protocol):
    def has_template(self, name: str) -> bool: ...

    def render(self, name: str, **context) -> str: ...


def template_candidates(block_type: str, area: Optional[str]) -> list[str]:
    if area:
        return [f"{block_type}_{area}", block_type]
    return [block_type]


def resolve_template(block_type: str, area: Optional[str], registry: TemplateRegistry) -> str:
    """
    Pick <BlockType>_<Area> when that variant exists, else <BlockType>.
    """
    candidates = template_candidates(block_type, area)
    for name in candidates:
        if registry.has_template(name):
            return name

    raise MissingTemplateError(block_type, candidates)
