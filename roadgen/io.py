import json
import os
from typing import Any, List, Optional

from .coords import Position
from .errors import InvalidArgumentError
from .faces import Face, Quad, Triangle
from .search import generate


def to_transport_form(faces: List[Face]) -> List[List[List[int]]]:
    """
    Flatten faces into nested lists of [x, y, z] integer triples.

    Triangles yield three vertices and quads four, in the order the face
    builder produced them. This is the only form the viewer and the batch
    writer consume.

    Args:
        faces: Faces in road order.

    Returns:
        One vertex list per face.

    Raises:
        InvalidArgumentError: If an entry is neither a Triangle nor a Quad.
    """
    flattened = []
    for face in faces:
        if isinstance(face, Triangle):
            flattened.append([face.p1.as_list(), face.p2.as_list(), face.p3.as_list()])
        elif isinstance(face, Quad):
            flattened.append([face.p1.as_list(), face.p2.as_list(), face.p3.as_list(), face.p4.as_list()])
        else:
            raise InvalidArgumentError(f"Cannot serialize {type(face).__name__} as a road face")
    return flattened


def faces_from_transport_form(data: Any) -> List[Face]:
    """Rebuild faces from their transport form (inverse of to_transport_form)."""
    if not isinstance(data, list):
        raise InvalidArgumentError("Road data must be a list of faces")

    faces: List[Face] = []
    for index, vertex_list in enumerate(data):
        if not isinstance(vertex_list, list):
            raise InvalidArgumentError(f"Face {index} must be a list of vertices")
        points = []
        for vertex in vertex_list:
            if not isinstance(vertex, (list, tuple)) or len(vertex) != 3:
                raise InvalidArgumentError(f"Face {index} has a vertex that is not an [x, y, z] triple")
            points.append(Position(*vertex))
        if len(points) == 3:
            faces.append(Triangle(*points))
        elif len(points) == 4:
            faces.append(Quad(*points))
        else:
            raise InvalidArgumentError(f"Face {index} has {len(points)} vertices, expected 3 or 4")
    return faces


def generate_json(
    size: int,
    linearity: int = 1,
    altitude_variation: int = 1,
    seed: Optional[int] = None,
) -> Optional[str]:
    """Run one attempt and return the road as a JSON string, or None if it got stuck."""
    faces = generate(size, linearity, altitude_variation, seed=seed)
    if faces is None:
        return None
    return json.dumps(to_transport_form(faces))


def save_faces_to_json(faces: List[Face], file_path: str):
    """
    Saves a road's flat face list to a JSON file.

    Args:
        faces: The faces to save.
        file_path: The full path for the output JSON file.

    Raises:
        Exception: Propagates exceptions from file I/O or JSON serialization.
    """
    if not file_path.lower().endswith(".json"):
        file_path += ".json"

    # Ensure the directory exists (if one is present)
    export_dir = os.path.dirname(file_path)
    if export_dir:
        os.makedirs(export_dir, exist_ok=True)

    print(f"Saving road to: {file_path}")
    try:
        with open(file_path, 'w') as f:
            json.dump(to_transport_form(faces), f)
        print("Road save successful.")
    except Exception as e:
        print(f"Error during JSON road save: {e}")
        raise
    return file_path


def load_faces_from_json(file_path: str) -> List[Face]:
    """
    Loads a road's face list from a JSON file.

    Raises:
        FileNotFoundError: If the file_path does not exist.
        Exception: Propagates exceptions from file I/O or JSON deserialization.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Road file not found: {file_path}")

    print(f"Loading road from: {file_path}")
    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
        faces = faces_from_transport_form(data)
        print(f"Road load successful. Faces: {len(faces)}")
    except Exception as e:
        print(f"Error during JSON road load: {e}")
        raise
    return faces
