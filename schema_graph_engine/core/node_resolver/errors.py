"""
Exceptions raised while resolving schema graph nodes.
"""

from typing import List


class NodeResolutionError(Exception):
    """Base class for node resolution failures."""


class MissingContextError(NodeResolutionError, RuntimeError):
    """Raised when a resolution context is required but none is active."""

    def __init__(self, message: str = "No active resolution context. Pass one explicitly or use active_context()."):
        super().__init__(message)


class MalformedIdError(NodeResolutionError, ValueError):
    """Raised when a node id has no fragment separator."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node id has no '#' fragment: {node_id!r}")


class MissingRequiredFieldsError(NodeResolutionError, ValueError):
    """Raised by explicit validation when declared required fields are absent."""

    def __init__(self, node_id: str, missing: List[str]):
        self.node_id = node_id
        self.missing = missing
        super().__init__(f"Node {node_id!r} is missing required fields: {', '.join(missing)}")
