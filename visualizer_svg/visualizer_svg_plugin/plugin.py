import os
from jinja2 import Environment, FileSystemLoader, select_autoescape
from api.roadmap_api.services.renderer_plugin import RendererPlugin
from api.roadmap_api.model import RenderView

# Width and height of the drawing surface
WIDTH = 1000
HEIGHT = 700
NODE_RADIUS = 22


def format_weight(weight) -> str:
    if isinstance(weight, float) and weight.is_integer():
        return str(int(weight))
    return str(weight)


def build_segments(view: RenderView):
    """
    Resolve every road to drawable coordinates.

    Roads whose cities are gone are skipped, and so are path ids that no
    longer name a road.
    """
    positions = {node.node_id: (node.x, node.y) for node in view.nodes}
    roads = []
    path = []

    for edge in view.edges:
        if edge.a not in positions or edge.b not in positions:
            continue

        (x1, y1), (x2, y2) = positions[edge.a], positions[edge.b]
        segment = {
            "id": edge.edge_id,
            "x1": x1,
            "y1": y1,
            "x2": x2,
            "y2": y2,
            "mx": (x1 + x2) / 2,
            "my": (y1 + y2) / 2 - 6,
            "label": format_weight(edge.weight),
            "a_name": view.node_by_id(edge.a).name,
            "b_name": view.node_by_id(edge.b).name,
            "on_path": edge.edge_id in view.path_edges,
        }
        roads.append(segment)
        if segment["on_path"]:
            path.append(segment)

    return roads, path


class SvgVisualizer(RendererPlugin):
    @property
    def plugin_id(self) -> str:
        return "svg-visualizer"

    @property
    def display_name(self) -> str:
        return "City Road Map (SVG)"

    def render(self, view: RenderView, **options) -> str:
        roads, path = build_segments(view)

        selected = view.node_by_id(view.selected_node) if view.selected_node is not None else None

        # --- Template Rendering ---
        template_path = os.path.join(os.path.dirname(__file__), 'templates')
        env = Environment(
            loader=FileSystemLoader(template_path),
            autoescape=select_autoescape(["html"]),
        )
        template = env.get_template('roadmap.html')

        return template.render(
            nodes=view.nodes,
            roads=roads,
            path=path,
            selected_node=view.selected_node,
            pending_source=view.pending_source,
            selected_name=selected.name if selected is not None else "—",
            mode=view.mode,
            stats=view.stats,
            radius=options.get("radius", NODE_RADIUS),
            width=options.get("width", WIDTH),
            height=options.get("height", HEIGHT),
        )
