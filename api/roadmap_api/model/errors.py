"""Errors raised by the road map model."""


class GraphError(ValueError):
    """Base class for rejected graph mutations."""


class SelfLoopError(GraphError):
    def __init__(self, node_id: int):
        super().__init__(f"A road cannot start and end at city '{node_id}'.")
        self.node_id = node_id


class DuplicateEdgeError(GraphError):
    def __init__(self, a: int, b: int):
        super().__init__(f"Road already exists between cities '{a}' and '{b}'.")
        self.a = a
        self.b = b


class InvalidWeightError(GraphError):
    def __init__(self, weight):
        super().__init__(f"Road weight must be a positive finite number, got {weight!r}.")
        self.weight = weight


class UnknownEntityError(GraphError):
    def __init__(self, entity_id: int):
        super().__init__(f"Entity '{entity_id}' does not exist.")
        self.entity_id = entity_id


class StateFormatError(ValueError):
    """Raised when a persisted record cannot be turned into a map."""
