from typing import Any, Dict, List, Tuple

import numpy as np
import trimesh

from .faces import Face, Quad, Triangle

# Quads are split along the p1-p3 diagonal, the way the browser viewer did it.
QUAD_TRIANGLES = np.array([[0, 1, 2], [2, 3, 0]])
TRIANGLE_TRIANGLES = np.array([[0, 1, 2]])


def faces_to_mesh(faces: List[Face]) -> trimesh.Trimesh:
    """
    Triangulates a road's faces into a single mesh for display.

    Vertices are kept per face (no merging), so vertex ``i`` of the mesh can
    be traced back to the face list.

    Args:
        faces: Faces in road order.

    Returns:
        A trimesh.Trimesh object with one or two triangles per face.

    Raises:
        ValueError: If the face list is empty.
    """
    if not faces:
        raise ValueError("Cannot build a mesh from an empty face list.")

    vertices = []
    triangles = []
    offset = 0
    for face in faces:
        if isinstance(face, Quad):
            pattern = QUAD_TRIANGLES
        elif isinstance(face, Triangle):
            pattern = TRIANGLE_TRIANGLES
        else:
            raise ValueError(f"Unknown face type: {type(face).__name__}")
        vertices.extend(p.as_list() for p in face.vertices)
        triangles.append(pattern + offset)
        offset += len(face.vertices)

    return trimesh.Trimesh(
        vertices=np.array(vertices, dtype=float),
        faces=np.vstack(triangles),
        process=False,
    )


def road_bounds(faces: List[Face]) -> Tuple[np.ndarray, np.ndarray]:
    if not faces:
        zero = np.array([0, 0, 0], dtype=np.int64)
        return zero, zero
    stacked = np.vstack([p.to_array() for face in faces for p in face.vertices])
    return stacked.min(axis=0), stacked.max(axis=0)


def _is_sloped(face: Face) -> bool:
    return len({p.y for p in face.vertices}) > 1


def road_metrics(faces: List[Face]) -> Dict[str, Any]:
    """Summarize a road: segment mix, bounds and surface area."""
    bounds_min, bounds_max = road_bounds(faces)
    metrics: Dict[str, Any] = {
        "segment_count": len(faces),
        "quads": sum(1 for face in faces if isinstance(face, Quad)),
        "turns": sum(1 for face in faces if isinstance(face, Triangle)),
        "slopes": sum(1 for face in faces if _is_sloped(face)),
        "bounds_min": bounds_min.tolist(),
        "bounds_max": bounds_max.tolist(),
        "surface_area": 0.0,
    }
    if faces:
        metrics["surface_area"] = round(float(faces_to_mesh(faces).area), 6)
    return metrics
