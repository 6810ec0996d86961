from __future__ import annotations

import os
import random
from typing import List, Optional, Tuple

from .constants import ROAD_FILE_PREFIX
from .errors import ConstructionError, GenerationExhaustedError
from .faces import Face
from .io import save_faces_to_json
from .search import generate


def _validate_max_attempts(max_attempts: Optional[int]) -> Optional[int]:
    if max_attempts is None:
        return None
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 0:
        raise ConstructionError(f"max_attempts must be a non-negative integer, got {max_attempts!r}")
    return max_attempts


def generate_road(
    size: int,
    linearity: int = 1,
    altitude_variation: int = 1,
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    rng: Optional[random.Random] = None,
    verbose: bool = False,
) -> Tuple[List[Face], int]:
    """
    Repeat single attempts on fresh lattices until one yields a complete road.

    Args:
        size: Lattice side and exact road length.
        linearity: Straight-ahead weight.
        altitude_variation: Climb weight.
        seed: Seeds one ``random.Random`` shared by all attempts, so the whole
            retry sequence is reproducible.
        max_attempts: Give up after this many attempts (None or 0 = never).
        rng: Explicit source of shuffles; overrides ``seed``.
        verbose: Print one line per failed attempt and the search's backtracking.

    Returns:
        (faces, attempts) for the first successful attempt.

    Raises:
        ConstructionError: If ``max_attempts`` is negative or not an integer.
        GenerationExhaustedError: If ``max_attempts`` attempts all got stuck.
    """
    max_attempts = _validate_max_attempts(max_attempts)
    if rng is None:
        rng = random.Random(seed)

    attempts = 0
    while not max_attempts or attempts < max_attempts:
        attempts += 1
        faces = generate(size, linearity, altitude_variation, rng=rng, verbose=verbose)
        if faces is not None:
            return faces, attempts
        if verbose:
            print(f"Info: Attempt {attempts} for a road of size {size} got stuck, retrying.")

    raise GenerationExhaustedError(attempts, size)


def generate_json_roads(
    count: int,
    size: int,
    out_dir: str,
    linearity: int = 1,
    altitude_variation: int = 1,
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    verbose: bool = False,
) -> List[str]:
    """
    Write ``count`` complete roads to ``out_dir/road_<i>.json``.

    Stuck attempts are retried and never counted, so exactly ``count`` files
    are written unless a road exhausts ``max_attempts``.
    max_attempts = _validate_max_attempts(max_attempts)
    """
    print(f"Generating {count} road(s) of size {size}.")
    rng = random.Random(seed)
    os.makedirs(out_dir, exist_ok=True)

    written: List[str] = []
    for index in range(count):
        faces, attempts = generate_road(
            size,
            linearity,
            altitude_variation,
            max_attempts=max_attempts,
            rng=rng,
            verbose=verbose,
        )
        path = save_faces_to_json(faces, os.path.join(out_dir, f"{ROAD_FILE_PREFIX}{index}.json"))
        written.append(path)
        print(f"Generated road no {index} of size {len(faces)} after {attempts} attempt(s)")
    return written
