from __future__ import annotations

from .models import Edge, Graph, Node


def _nodes(*items: tuple[str, float, float]) -> tuple[Node, ...]:
    return tuple(Node(id=node_id, x=x, y=y, label=node_id) for node_id, x, y in items)


def _edges(*items: tuple) -> tuple[Edge, ...]:
    return tuple(Edge(*item) for item in items)


SAMPLE_GRAPHS: dict[str, Graph] = {
    "Simple Path": Graph(
        nodes=_nodes(("A", 100, 200), ("B", 250, 100), ("C", 250, 300), ("D", 400, 200), ("E", 550, 200)),
        edges=_edges(("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "E")),
        directed=False,
    ),
    "Grid Graph": Graph(
        nodes=_nodes(
            ("1", 100, 100), ("2", 250, 100), ("3", 400, 100),
            ("4", 100, 250), ("5", 250, 250), ("6", 400, 250),
            ("7", 100, 400), ("8", 250, 400), ("9", 400, 400),
        ),
        edges=_edges(
            ("1", "2"), ("2", "3"), ("4", "5"), ("5", "6"), ("7", "8"), ("8", "9"),
            ("1", "4"), ("4", "7"), ("2", "5"), ("5", "8"), ("3", "6"), ("6", "9"),
        ),
        directed=False,
    ),
    "Weighted Graph": Graph(
        nodes=_nodes(("S", 100, 200), ("A", 250, 100), ("B", 250, 300), ("C", 400, 100), ("D", 400, 300), ("T", 550, 200)),
        edges=_edges(
            ("S", "A", 4), ("S", "B", 2), ("A", "C", 5), ("A", "B", 1),
            ("B", "D", 8), ("C", "T", 3), ("D", "T", 2), ("C", "D", 1),
        ),
        directed=False,
    ),
    "Directed Graph (PageRank)": Graph(
        nodes=_nodes(
            ("Home", 300, 100), ("About", 150, 250), ("Products", 450, 250),
            ("Blog", 200, 400), ("Contact", 400, 400),
        ),
        edges=_edges(
            ("Home", "About"), ("Home", "Products"), ("Home", "Blog"),
            ("About", "Home"), ("About", "Contact"),
            ("Products", "Home"), ("Products", "Contact"),
            ("Blog", "Home"), ("Blog", "Products"),
            ("Contact", "Home"),
        ),
        directed=True,
    ),
    "Disconnected Graph": Graph(
        nodes=_nodes(("A", 100, 150), ("B", 200, 100), ("C", 200, 200), ("X", 400, 150), ("Y", 500, 100), ("Z", 500, 200)),
        edges=_edges(("A", "B"), ("A", "C"), ("B", "C"), ("X", "Y"), ("X", "Z"), ("Y", "Z")),
        directed=False,
    ),
}


def get_sample_graph(name: str) -> Graph | None:
    return SAMPLE_GRAPHS.get(name)
