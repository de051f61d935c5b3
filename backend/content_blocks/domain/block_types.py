from typing import Dict, List, Optional

from .exceptions import BlockControllerNotFound

BASE_BLOCK_TYPE = "Block"


class BlockType:
    def __init__(self, name, controller=None, parent=None):
        self.name = name
        self.controller = controller
        self.parent = parent

    def __repr__(self):
        return f"<BlockType {self.name} parent={self.parent}>"


class BlockTypeRegistry:
    """
    Explicit map of block type name -> (parent type, controller class).

    Controller lookup walks the declared parent chain, so a subtype without
    its own controller renders with the nearest ancestor's.
    """

    def __init__(self):
        self._types: Dict[str, BlockType] = {}

    def register(self, name: str, controller=None, parent: Optional[str] = None) -> BlockType:
        if parent is not None and parent not in self._types:
            raise ValueError(f"Parent block type '{parent}' is not registered")
        block_type = BlockType(name, controller=controller, parent=parent)
        self._types[name] = block_type
        return block_type

    def is_registered(self, name) -> bool:
        return name in self._types

    def names(self) -> List[str]:
        return sorted(self._types)

    def subtype_names(self) -> List[str]:
        """Selectable types: everything but the abstract base."""
        return [name for name in self.names() if name != BASE_BLOCK_TYPE]

    def ancestry(self, name: str) -> List[str]:
        chain = []
        current = self._types.get(name)
        while current is not None:
            if current.name in chain:
                raise BlockControllerNotFound(f"Cyclic block type ancestry for {name}")
            chain.append(current.name)
            current = self._types.get(current.parent) if current.parent else None
        return chain

    def controller_for(self, name: str):
        for type_name in self.ancestry(name):
            controller = self._types[type_name].controller
            if controller is not None:
                return controller

        raise BlockControllerNotFound(f"Could not find controller class for {name}")
