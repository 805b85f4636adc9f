class ConfigurationError(ValueError):
    """Scene construction failed; raised before any ray is traced."""


class NonInvertibleTransformError(ConfigurationError):
    pass


class DegenerateTriangleError(ConfigurationError):
    pass


class ShapeHierarchyError(ConfigurationError):
    """A shape would end up with two owners or inside its own subtree."""


class InvalidMaterialError(ConfigurationError):
    pass
