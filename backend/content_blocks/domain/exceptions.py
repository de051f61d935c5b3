class MissingTemplateError(LookupError):
    """No template exists for a block type (or its area variant)."""

    def __init__(self, block_type, candidates):
        self.block_type = block_type
        self.candidates = list(candidates)
        super().__init__(
            f"Missing template for block type '{block_type}' "
            f"(tried: {', '.join(self.candidates)})"
        )


class BlockControllerNotFound(RuntimeError):
    """Configuration defect: a block type resolves to no controller."""


class PermissionServiceError(RuntimeError):
    """The capability checker could not answer."""
