class Node:
    def __init__(self, node_id: int, name: str, x: float = 0.0, y: float = 0.0):
        self.node_id = node_id
        self.name = name
        self.x = x
        self.y = y

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def to_dict(self) -> dict:
        return {
            "id": self.node_id,
            "name": self.name,
            "x": self.x,
            "y": self.y,
        }

    def __repr__(self) -> str:
        return f"Node({self.node_id!r}, {self.name!r})"
