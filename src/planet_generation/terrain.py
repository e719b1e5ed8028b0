"""Terrain synthesis for the 3D planet view.

This module builds a displaced, flat-shaded icosphere from a noise field,
classifies each face as land or water, and stamps event-driven volcanic
upheavals and meteor craters onto the surface. It also scatters trees and
rocks across the land using a Fibonacci sphere distribution.

The mesh is non-indexed: every face owns its three vertices, so colors
and normals are per face.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from matplotlib.colors import LinearSegmentedColormap, is_color_like, to_hex, to_rgb
from opensimplex import OpenSimplex

from src.utils.config import Configuration, DEFAULT_CONFIGURATION
from src.utils.exceptions import InvalidInputError

from .events import EventType, PlanetEvent
from .random_stream import SeededRandomStream, create_stream

logger = logging.getLogger(__name__)

MUTATION_TYPES = ("volcanic", "meteor")

_GOLDEN = (1 + math.sqrt(5)) / 2

_ICOSAHEDRON_VERTICES = [
    (-1, _GOLDEN, 0), (1, _GOLDEN, 0), (-1, -_GOLDEN, 0), (1, -_GOLDEN, 0),
    (0, -1, _GOLDEN), (0, 1, _GOLDEN), (0, -1, -_GOLDEN), (0, 1, -_GOLDEN),
    (_GOLDEN, 0, -1), (_GOLDEN, 0, 1), (-_GOLDEN, 0, -1), (-_GOLDEN, 0, 1),
]

_ICOSAHEDRON_FACES = [
    (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
    (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
    (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
    (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
]


@dataclass(frozen=True)
class NoiseConfig:
    """Parameters of the surface noise.

    Attributes:
        frequency: Scale applied to vertex positions before sampling
        displacement_scale: Outward displacement for a noise value of 1
        water_threshold: Raw noise at or below this value is sea
        water_floor_noise_value: Noise value that sea vertices are flattened to
    """

    frequency: float
    displacement_scale: float
    water_threshold: float
    water_floor_noise_value: float

    @classmethod
    def from_config(cls, config: Configuration = DEFAULT_CONFIGURATION) -> "NoiseConfig":
        return cls(**config["default_noise_config"])


@dataclass(frozen=True)
class TerrainMutation:
    """A volcanic upheaval or meteor crater centered on the unit sphere.

    ``center`` is normalized on construction. ``radius`` is the angular
    radius of influence in radians and ``strength`` the displacement at
    the very center.
    """

    type: str
    center: Tuple[float, float, float]
    radius: float
    strength: float

    def __post_init__(self):
        if self.type not in MUTATION_TYPES:
            raise InvalidInputError(f"Unknown mutation type: {self.type!r}")
        center = np.asarray(self.center, dtype=float)
        length = float(np.linalg.norm(center))
        if center.shape != (3,) or length == 0 or not math.isfinite(length):
            raise InvalidInputError(f"Mutation center must be a non-zero 3-vector, got {self.center!r}")
        object.__setattr__(self, "center", tuple(float(c) for c in center / length))

    @property
    def sign(self) -> float:
        return 1.0 if self.type == "volcanic" else -1.0


@dataclass(frozen=True)
class TerrainParams:
    """Everything that determines one terrain mesh."""

    radius: float
    detail: int
    ground_color: str
    water_color: str
    noise: NoiseConfig
    time_offset: float = 0.0
    mutations: Tuple[TerrainMutation, ...] = ()


@dataclass(frozen=True)
class TerrainMesh:
    """A finished terrain mesh.

    ``positions``, ``colors`` and ``normals`` are read-only float32 arrays
    of shape ``(vertex_count, 3)``; every consecutive triple of vertices is
    one face. ``water_mask`` flags the faces classified as sea.
    """

    positions: np.ndarray
    colors: np.ndarray
    normals: np.ndarray
    water_mask: np.ndarray
    ground_faces: int
    water_faces: int

    @property
    def face_count(self) -> int:
        return len(self.water_mask)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def water_fraction(self) -> float:
        if self.face_count == 0:
            return 0.0
        return self.water_faces / self.face_count

    def face_colors(self) -> np.ndarray:
        """One RGB row per face."""
        return self.colors[::3]


@dataclass(frozen=True)
class Tree:
    position: Tuple[float, float, float]
    trunk_size: float
    body_size: float
    trunk_color: str
    body_color: str


@dataclass(frozen=True)
class Rock:
    position: Tuple[float, float, float]
    size: float
    color: str


@dataclass(frozen=True)
class SurfaceObjects:
    trees: Tuple[Tree, ...] = field(default_factory=tuple)
    rocks: Tuple[Rock, ...] = field(default_factory=tuple)


class NoiseField:
    """Stateless 3D simplex noise rescaled to [0, 1].

    The underlying OpenSimplex permutation is fixed at construction, so
    sampling is a pure function of the coordinates.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._simplex = OpenSimplex(seed=seed)

    def sample(self, point: Sequence[float], frequency: float,
               time_offset: float = 0.0) -> float:
        """Raw noise at ``point * frequency + time_offset``."""
        x, y, z = (float(c) * frequency + time_offset for c in point)
        value = (self._simplex.noise3(x, y, z) + 1) / 2
        return min(1.0, max(0.0, value))

    def sample_many(self, points: np.ndarray, frequency: float,
                    time_offset: float = 0.0) -> np.ndarray:
        """Raw noise for every row of an ``(n, 3)`` array."""
        return np.array([self.sample(p, frequency, time_offset) for p in points],
                        dtype=float)


def threshold_noise(raw, noise: NoiseConfig):
    """Flatten everything at or below the water threshold to the sea floor value."""
    return np.where(np.asarray(raw) > noise.water_threshold, raw,
                    noise.water_floor_noise_value)


def _subdivide_face(a: np.ndarray, b: np.ndarray, c: np.ndarray,
                    cols: int) -> List[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    grid = []
    for i in range(cols + 1):
        aj = a + (c - a) * (i / cols)
        bj = b + (c - b) * (i / cols)
        rows = cols - i
        row = []
        for j in range(rows + 1):
            if j == 0 and i == cols:
                row.append(aj)
            else:
                row.append(aj + (bj - aj) * (j / rows))
        grid.append(row)

    triangles = []
    for i in range(cols):
        for j in range(2 * (cols - i) - 1):
            k = j // 2
            if j % 2 == 0:
                triangles.append((grid[i][k + 1], grid[i + 1][k], grid[i][k]))
            else:
                triangles.append((grid[i][k + 1], grid[i + 1][k + 1], grid[i + 1][k]))
    return triangles


def icosphere(radius: float, detail: int) -> np.ndarray:
    """Non-indexed icosphere as an array of shape ``(faces, 3, 3)``.

    Each of the 20 icosahedron faces is split into ``(detail + 1) ** 2``
    triangles and every vertex is pushed out onto the sphere.

    Args:
        radius: Sphere radius
        detail: Subdivision level, 0 for the bare icosahedron

    Returns:
        Vertex positions grouped by face
    """
    base = np.array(_ICOSAHEDRON_VERTICES, dtype=float)
    cols = detail + 1
    triangles = []
    for ia, ib, ic in _ICOSAHEDRON_FACES:
        triangles.extend(_subdivide_face(base[ia], base[ib], base[ic], cols))
    faces = np.array(triangles, dtype=float)
    return faces / np.linalg.norm(faces, axis=2, keepdims=True) * radius


def fibonacci_sphere_points(samples: int, radius: float,
                            random_value: float = 1.0) -> np.ndarray:
    """Near-uniform points on a sphere along a golden-angle spiral.

    ``random_value`` rotates the spiral; pass a seed-derived value in
    ``[0, samples)`` to vary the layout between planets.
    """
    if samples <= 0:
        return np.zeros((0, 3))
    offset = 2 / samples
    increment = math.pi * (3 - math.sqrt(5))

    i = np.arange(samples)
    y = i * offset - 1 + offset / 2
    distance = np.sqrt(1 - y ** 2)
    phi = ((i + random_value) % samples) * increment
    return np.column_stack((np.cos(phi) * distance, y, np.sin(phi) * distance)) * radius


def mutation_influence(directions: np.ndarray,
                       mutations: Sequence[TerrainMutation],
                       min_radius: float = 0.0001) -> np.ndarray:
    """Influence of each mutation on each unit direction.

    Influence falls linearly from 1 at the mutation center to 0 at its
    angular radius.

    Returns:
        Array of shape ``(len(directions), len(mutations))``
    """
    if not mutations:
        return np.zeros((len(directions), 0))
    centers = np.array([m.center for m in mutations], dtype=float)
    radii = np.array([max(min_radius, m.radius) for m in mutations], dtype=float)
    angles = np.arccos(np.clip(directions @ centers.T, -1.0, 1.0))
    return np.maximum(0.0, 1.0 - angles / radii)


def _unit(vectors: np.ndarray) -> np.ndarray:
    lengths = np.linalg.norm(vectors, axis=-1, keepdims=True)
    return vectors / np.where(lengths == 0, 1.0, lengths)


def _validate_params(params: TerrainParams) -> None:
    if isinstance(params.detail, bool) or not isinstance(params.detail, int) or params.detail < 0:
        raise InvalidInputError(f"Detail must be a non-negative integer, got {params.detail!r}")
    if not math.isfinite(params.radius) or params.radius <= 0:
        raise InvalidInputError(f"Radius must be positive, got {params.radius!r}")
    for name in ("frequency", "displacement_scale", "water_threshold",
                 "water_floor_noise_value"):
        if not math.isfinite(getattr(params.noise, name)):
            raise InvalidInputError(f"Noise {name} must be finite")
    if not math.isfinite(params.time_offset):
        raise InvalidInputError("Time offset must be finite")
    for color in (params.ground_color, params.water_color):
        if not is_color_like(color):
            raise InvalidInputError(f"Not a color: {color!r}")


class TerrainSynthesizer:
    """Turns TerrainParams into a displaced, colored TerrainMesh.

    Identical parameters always give identical arrays: the noise field is
    fixed per synthesizer and nothing else is random.
    """

    def __init__(self, config: Configuration = DEFAULT_CONFIGURATION,
                 noise_field: Optional[NoiseField] = None):
        """Initialize the TerrainSynthesizer.

        Args:
            config: Generator configuration; defaults when omitted
            noise_field: Noise source; built from the configured noise seed
                when omitted
        """
        self.config = config
        self.noise_field = noise_field or NoiseField(config["noise_seed"])
        self.lava_color = to_rgb(config["lava_color"])
        self.ash_color = to_rgb(config["ash_color"])
        self.activation_threshold = config["mutation_activation_threshold"]
        self.min_radius = config["mutation_min_radius"]

    def synthesize(self, params: TerrainParams) -> TerrainMesh:
        """Build the mesh described by ``params``.

        Args:
            params: Size, colors, noise and mutations of the terrain

        Returns:
            The finished TerrainMesh

        Raises:
            InvalidInputError: If the detail, radius, noise values or
                colors are invalid
        """
        _validate_params(params)
        noise = params.noise

        faces = icosphere(params.radius, params.detail)
        face_count = len(faces)
        vertices = faces.reshape(-1, 3)
        directions = _unit(vertices)

        raw = self.noise_field.sample_many(vertices, noise.frequency, params.time_offset)
        heights = threshold_noise(raw, noise) * noise.displacement_scale

        mutations = list(params.mutations)
        influence = mutation_influence(directions, mutations, self.min_radius)
        if mutations:
            signed = np.array([m.sign * m.strength for m in mutations])
            heights = heights + influence @ signed

        positions = vertices + directions * heights[:, None]

        water_mask = np.all(raw.reshape(face_count, 3) <= noise.water_threshold, axis=1)
        face_colors = np.where(water_mask[:, None],
                               np.array(to_rgb(params.water_color)),
                               np.array(to_rgb(params.ground_color)))

        if mutations:
            face_influence = influence.reshape(face_count, 3, len(mutations)).mean(axis=1)
            volcanic = np.array([m.type == "volcanic" for m in mutations])
            avg_volcanic = face_influence[:, volcanic].sum(axis=1)
            avg_meteor = face_influence[:, ~volcanic].sum(axis=1)
            lava = avg_volcanic > self.activation_threshold
            ash = ~lava & (avg_meteor > self.activation_threshold)
            face_colors[lava] = self.lava_color
            face_colors[ash] = self.ash_color

        face_positions = positions.reshape(face_count, 3, 3)
        face_normals = _unit(np.cross(face_positions[:, 1] - face_positions[:, 0],
                                      face_positions[:, 2] - face_positions[:, 0]))

        water_faces = int(water_mask.sum())
        mesh = TerrainMesh(
            positions=_frozen(positions),
            colors=_frozen(np.repeat(face_colors, 3, axis=0)),
            normals=_frozen(np.repeat(face_normals, 3, axis=0)),
            water_mask=_frozen(water_mask, dtype=bool),
            ground_faces=face_count - water_faces,
            water_faces=water_faces,
        )
        logger.info(
            "Terrain: %d faces, %d ground (%s), %d water (%s), %d%% water",
            face_count, mesh.ground_faces, params.ground_color,
            water_faces, params.water_color, round(mesh.water_fraction * 100),
        )
        return mesh

    def surface_noise(self, point: Sequence[float], noise: NoiseConfig,
                      time_offset: float = 0.0,
                      frequency: Optional[float] = None) -> float:
        """Thresholded noise at ``point``, the value that drives displacement."""
        frequency = noise.frequency if frequency is None else frequency
        raw = self.noise_field.sample(point, frequency, time_offset)
        return float(threshold_noise(raw, noise))

    def displace_point(self, point: Sequence[float], noise: NoiseConfig,
                       time_offset: float = 0.0) -> np.ndarray:
        """Lift ``point`` onto the unmutated terrain surface."""
        point = np.asarray(point, dtype=float)
        height = self.surface_noise(point, noise, time_offset) * noise.displacement_scale
        return point + _unit(point) * height


def _frozen(array: np.ndarray, dtype=np.float32) -> np.ndarray:
    array = np.ascontiguousarray(array, dtype=dtype)
    array.setflags(write=False)
    return array


def mutations_from_events(seed: str, events: Iterable[PlanetEvent], day: int,
                          config: Configuration = DEFAULT_CONFIGURATION
                          ) -> List[TerrainMutation]:
    """Derive terrain mutations from the volcanic and meteor events so far.

    Each qualifying event reads its own stream ``"<seed>-event-<event id>"``,
    so the mutation of an event never changes as more events happen.

    Args:
        seed: Planet seed
        events: Event history of the planet
        day: Current day; events after it are ignored

    Returns:
        Mutations in event order
    """
    shapes = config["mutation_shapes"]
    mutations = []
    for event in events:
        kind = EventType(event.type).value
        if event.day > day or kind not in MUTATION_TYPES:
            continue
        rng = create_stream(seed, "event", event.id)
        theta = math.acos(1 - 2 * rng.next())
        phi = 2 * math.pi * rng.next()
        center = (math.sin(theta) * math.cos(phi),
                  math.cos(theta),
                  math.sin(theta) * math.sin(phi))
        radius_base, radius_spread = shapes[kind]["radius"]
        strength_base, strength_spread = shapes[kind]["strength"]
        mutations.append(TerrainMutation(
            type=kind,
            center=center,
            radius=radius_base + radius_spread * rng.next(),
            strength=strength_base + strength_spread * rng.next(),
        ))
    return mutations


class SurfacePlacer:
    """Scatters trees and rocks over the land of a terrain."""

    def __init__(self, synthesizer: TerrainSynthesizer):
        self.synthesizer = synthesizer
        self.config = synthesizer.config

    def place(self, rng: SeededRandomStream, params: TerrainParams,
              max_trees: int, max_rocks: int, tree_palette: Sequence[str],
              rock_color: str, tree_size: float = 1.0,
              rock_size: float = 1.0) -> SurfaceObjects:
        """Place up to ``max_trees`` trees and ``max_rocks`` rocks.

        One candidate point is generated per allowed object. Points that
        land in the sea are skipped; the rest become a tree when the
        point's roll beats the rock share, otherwise a rock.

        Args:
            rng: Stream driving the layout and sizes
            params: Terrain the objects sit on
            max_trees: Upper bound on trees
            max_rocks: Upper bound on rocks
            tree_palette: Colors blended along the tree color noise
            rock_color: Color of every rock

        Returns:
            The placed SurfaceObjects
        """
        total = max_trees + max_rocks
        if total <= 0:
            return SurfaceObjects()

        noise = params.noise
        colormap = LinearSegmentedColormap.from_list("trees", list(tree_palette))
        trunk_color = self.config["tree_trunk_color"]
        tree_low, tree_high = self.config["tree_size_range"]
        body_low, body_high = self.config["tree_body_ratio_range"]
        rock_low, rock_high = self.config["rock_size_range"]
        color_frequency = self.config["tree_color_noise_frequency"]
        rock_share = max_rocks / total

        points = fibonacci_sphere_points(total, params.radius, rng.next() * total)
        trees: List[Tree] = []
        rocks: List[Rock] = []
        for point in points:
            value = self.synthesizer.surface_noise(point, noise, params.time_offset)
            if value == noise.water_floor_noise_value:
                continue
            position = self.synthesizer.displace_point(point, noise, params.time_offset)
            location = tuple(float(c) for c in position)

            if rng.next() > rock_share and len(trees) < max_trees:
                trunk = rng.uniform(tree_low, tree_high) * tree_size
                body = trunk * rng.uniform(body_low, body_high) * tree_size
                shade = self.synthesizer.surface_noise(
                    position, noise, params.time_offset, frequency=color_frequency)
                trees.append(Tree(location, trunk, body, trunk_color,
                                  to_hex(colormap(shade))))
            elif len(rocks) < max_rocks:
                size = rng.uniform(rock_low, rock_high) * rock_size
                rocks.append(Rock(location, size, rock_color))

        logger.debug("Placed %d trees and %d rocks from %d points",
                     len(trees), len(rocks), total)
        return SurfaceObjects(trees=tuple(trees), rocks=tuple(rocks))
