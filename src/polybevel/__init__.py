"""polybevel: round the edges and corners of convex polyhedral meshes.

Public API is organised into layers:

- **Core**: models, container, errors, I/O
- **Rounding**: configuration and the bevel pipeline phases
- **Building**: convex shape constructors and transforms
- **Rendering**: PNG preview (requires matplotlib)
- **Diagnostics**: closedness and orientation checks
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Vertex, Face, MeshSnapshot, GeometryBuffers
from .model import Model
from .errors import BevelError, InvalidFaceError, InconsistentWindingError, RadiusTooLargeError
from .io import load_json, save_json
from .logging_config import setup_logging

# ── Rounding ────────────────────────────────────────────────────────
from .config import RoundingConfig, DEFAULT_ROUNDING, CUBON_BEVEL, CUBON_RADIUS
from .topology import RoundingEdge, Corner, TopologyAnalysis, analyse_topology
from .inset import InsetResult, inset_polygon, inset_faces
from .fillet import EdgeFilletResult, fillet_edges
from .corners import spherical_line, fillet_corners
from .bevel import RoundingReport, round_mesh

# ── Building ────────────────────────────────────────────────────────
from .builders import (
    build_polygon,
    build_box,
    build_corner_piece,
    build_tetrahedron,
    build_prism,
)
from .transforms import apply_matrix, translate_model, scale_model, rotate_model

# ── Rendering ───────────────────────────────────────────────────────
from .render import render_png

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import (
    edge_use_counts,
    boundary_edges,
    non_manifold_edges,
    inconsistent_edges,
    is_closed,
    euler_characteristic,
    min_face_area,
    inward_faces,
    diagnostics_report,
)

__all__ = [
    # Core
    "Vertex",
    "Face",
    "MeshSnapshot",
    "GeometryBuffers",
    "Model",
    "BevelError",
    "InvalidFaceError",
    "InconsistentWindingError",
    "RadiusTooLargeError",
    "load_json",
    "save_json",
    "setup_logging",
    # Rounding
    "RoundingConfig",
    "DEFAULT_ROUNDING",
    "CUBON_BEVEL",
    "CUBON_RADIUS",
    "RoundingEdge",
    "Corner",
    "TopologyAnalysis",
    "analyse_topology",
    "InsetResult",
    "inset_polygon",
    "inset_faces",
    "EdgeFilletResult",
    "fillet_edges",
    "spherical_line",
    "fillet_corners",
    "RoundingReport",
    "round_mesh",
    # Building
    "build_polygon",
    "build_box",
    "build_corner_piece",
    "build_tetrahedron",
    "build_prism",
    "apply_matrix",
    "translate_model",
    "scale_model",
    "rotate_model",
    # Rendering
    "render_png",
    # Diagnostics
    "edge_use_counts",
    "boundary_edges",
    "non_manifold_edges",
    "inconsistent_edges",
    "is_closed",
    "euler_characteristic",
    "min_face_area",
    "inward_faces",
    "diagnostics_report",
]
