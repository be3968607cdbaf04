"""
Transforms

Pose value type and the matrix/quaternion helpers used by keyframe
interpolation.

Matrices follow the pyrr row-vector layout used by the rest of the engine:
points transform as ``v @ M``, the upper-left 3x3 block is the rotation and
row 3 holds the translation. Quaternions are pyrr ``[x, y, z, w]``.
"""

from dataclasses import dataclass, field

import numpy as np
from pyrr import Matrix44, Quaternion, Vector3

from ..config.settings import TIME_EPSILON


def float_equal(a: float, b: float, epsilon: float = TIME_EPSILON) -> bool:
    """Return True when a and b differ by no more than epsilon."""
    return abs(a - b) <= epsilon


def translation_of(matrix) -> Vector3:
    """Translation component of a transform."""
    return Vector3(np.array(matrix[3, :3], dtype=float))


def set_translation(matrix, translation):
    """Overwrite the translation component of a transform in place."""
    matrix[3, :3] = np.asarray(translation, dtype=float)


def rotation_matrix(orientation) -> Matrix44:
    """
    Build a pure rotation transform from a quaternion.

    Args:
        orientation: Quaternion [x, y, z, w] (normalised before use)

    Returns:
        Matrix44 with zero translation
    """
    q = np.asarray(orientation, dtype=float)
    q = Quaternion(q / np.linalg.norm(q))

    # pyrr builds the inverse rotation for row vectors; the conjugate undoes it
    return Matrix44.from_quaternion(q.conjugate)


def rotation_of(matrix) -> Quaternion:
    """
    Extract the rotation of a transform as a unit quaternion.

    Args:
        matrix: 4x4 transform in row-vector layout

    Returns:
        Quaternion [x, y, z, w]
    """
    mat = Matrix44(np.array(matrix, dtype=float))
    q = np.asarray(Quaternion.from_matrix(mat).conjugate, dtype=float)
    return Quaternion(q / np.linalg.norm(q))


def compose(orientation, position) -> Matrix44:
    """Rotate by orientation, then translate by position."""
    mat = rotation_matrix(orientation)
    set_translation(mat, position)
    return mat


def slerp(q0, q1, t: float) -> Quaternion:
    """
    Shortest-path spherical interpolation between two rotations.

    Args:
        q0: Start quaternion
        q1: End quaternion
        t: Fraction in [0, 1]

    Returns:
        Unit quaternion
    """
    a = np.asarray(q0, dtype=float)
    b = np.asarray(q1, dtype=float)

    # q and -q are the same rotation; take the short arc
    if np.dot(a, b) < 0.0:
        b = -b

    result = np.asarray(Quaternion(a).slerp(Quaternion(b), t), dtype=float)
    return Quaternion(result / np.linalg.norm(result))


def as_transform(value) -> Matrix44:
    """
    Coerce a keyframe value to a private 4x4 transform.

    Args:
        value: Pose or any 4x4 array-like

    Returns:
        A new Matrix44 that does not alias the input
    """
    if isinstance(value, Pose):
        return value.to_matrix()

    mat = np.array(value, dtype=float)
    if mat.shape != (4, 4):
        raise ValueError(f"transform must have shape (4, 4), got {mat.shape}")
    return Matrix44(mat)


@dataclass
class Pose:
    """
    Position and orientation of a node.

    position:    Vector3 shape (3,)
    orientation: Quaternion shape (4,) (x, y, z, w)
    """
    position: Vector3 = field(default_factory=lambda: Vector3([0.0, 0.0, 0.0]))
    orientation: Quaternion = field(default_factory=Quaternion)

    def __post_init__(self):
        position = np.array(self.position, dtype=float)
        if position.shape != (3,):
            raise ValueError("position must have shape (3,)")
        self.position = Vector3(position)

        orientation = np.array(self.orientation, dtype=float)
        if orientation.shape != (4,):
            raise ValueError("orientation (quaternion) must have shape (4,)")
        self.orientation = Quaternion(orientation)

    @classmethod
    def from_matrix(cls, matrix) -> "Pose":
        """Decompose a transform into translation and rotation."""
        return cls(translation_of(matrix), rotation_of(matrix))

    def to_matrix(self) -> Matrix44:
        """Transform that applies the orientation, then the position."""
        return compose(self.orientation, self.position)
