"""
JSON snapshot export for generated layouts.

Produces the flat document consumed by map tooling:

    {"width": ..., "height": ...,
     "nodes": [{"id", "type", "team", "x", "y"}, ...],
     "edges": [{"from", "to", "type", "purpose"?}, ...]}

Node coordinates are rounded half-up to integers. Map dimensions are
written as integers when they are whole numbers. ``purpose`` is only
written for edges that carry one.
"""

import json
import math
from pathlib import Path
from typing import Any, Dict, Union

import structlog

from .core.layout_analysis import all_edges, all_nodes
from .core.models import Edge, MapLayout, Node

logger = structlog.get_logger()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _dimension(value: float) -> Union[int, float]:
    # Whole-number sizes are written as 204, not 204.0
    return int(value) if float(value).is_integer() else value


def node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "id": node.id,
        "type": node.type.value,
        "team": node.team.value,
        "x": _round_half_up(node.pos.x),
        "y": _round_half_up(node.pos.y),
    }


def edge_to_dict(edge: Edge) -> Dict[str, Any]:
    data = {"from": edge.from_id, "to": edge.to_id, "type": edge.edge_type.value}
    if edge.purpose is not None:
        data["purpose"] = edge.purpose
    return data


def layout_to_dict(layout: MapLayout) -> Dict[str, Any]:
    """Flatten a layout into the export document (shared nodes listed once)."""
    return {
        "width": _dimension(layout.width),
        "height": _dimension(layout.height),
        "nodes": [node_to_dict(n) for n in all_nodes(layout)],
        "edges": [edge_to_dict(e) for e in all_edges(layout)],
    }


def write_layout_json(layout: MapLayout, path: Union[str, Path]) -> Path:
    """
    Write the export document to path with 2-space indentation.

    Returns:
        The written path
    """
    path = Path(path)
    data = layout_to_dict(layout)
    path.write_text(json.dumps(data, indent=2))
    logger.info("Layout exported", path=str(path), nodes=len(data["nodes"]), edges=len(data["edges"]))
    return path
