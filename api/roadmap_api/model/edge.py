class Edge:
    # Roads are undirected, a and b are only stored in creation order
    def __init__(self, edge_id: int, a: int, b: int, weight: float):
        self.edge_id = edge_id
        self.a = a
        self.b = b
        self.weight = weight

    def connects(self, a: int, b: int) -> bool:
        return (self.a == a and self.b == b) or (self.a == b and self.b == a)

    def touches(self, node_id: int) -> bool:
        return self.a == node_id or self.b == node_id

    def other(self, node_id: int) -> int:
        return self.b if self.a == node_id else self.a

    def to_dict(self) -> dict:
        return {
            "id": self.edge_id,
            "a": self.a,
            "b": self.b,
            "w": self.weight,
        }

    def __repr__(self) -> str:
        return f"Edge({self.edge_id!r}, {self.a!r}-{self.b!r}, w={self.weight!r})"
