# Sample map offered by the "load seed" action

SEED_RECORD = {
    "nodes": [
        {"id": 1, "name": "A", "x": 250, "y": 220},
        {"id": 2, "name": "B", "x": 520, "y": 180},
        {"id": 3, "name": "C", "x": 820, "y": 280},
        {"id": 4, "name": "D", "x": 420, "y": 460},
        {"id": 5, "name": "E", "x": 760, "y": 520},
    ],
    "edges": [
        {"id": 6, "a": 1, "b": 2, "w": 8},
        {"id": 7, "a": 2, "b": 3, "w": 6},
        {"id": 8, "a": 1, "b": 4, "w": 7},
        {"id": 9, "a": 4, "b": 5, "w": 5},
        {"id": 10, "a": 2, "b": 4, "w": 3},
        {"id": 11, "a": 3, "b": 5, "w": 4},
    ],
    "nextId": 12,
}
