# -- 2D Vector Value Type -- #

'''
Mutable two-component vector for the particle hot loops.

Every binary operation writes into a caller-supplied output vector
so the solver can reuse scratch vectors instead of allocating a new
object per particle pair. Operations return the output vector to
allow chaining.

The periodic helpers implement the minimum-image convention on a
torus of size (sizeX, sizeY):

    d = ((delta + size/2) mod size) - size/2

with a non-negative (Euclidean) modulo, matching the cell index
wrapping used by the spatial grid.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math


class Vector2:
    '''
    Two-component float vector (x, y).

    Parameters:
    -----------
    x : float
        First component
    y : float
        Second component
    '''

    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)

    def set(self, x: float, y: float) -> Vector2:
        '''Overwrite both components in place and return self.'''
        self.x = x
        self.y = y
        return self

    def copy(self) -> Vector2:
        '''New vector with the same components.'''
        return Vector2(self.x, self.y)

    def asTuple(self) -> tuple[float, float]:
        '''Components as an immutable (x, y) tuple.'''
        return (self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    # Mutable value type
    __hash__ = None

    def __repr__(self) -> str:
        return f'Vector2({self.x!r}, {self.y!r})'


#--------------------------------------------------------------------#
# -- Arithmetic -- #
#--------------------------------------------------------------------#

def add(v1: Vector2, v2: Vector2, out: Vector2) -> Vector2:
    '''out = v1 + v2'''
    return out.set(v1.x + v2.x, v1.y + v2.y)


def sub(v1: Vector2, v2: Vector2, out: Vector2) -> Vector2:
    '''out = v1 - v2'''
    return out.set(v1.x - v2.x, v1.y - v2.y)


def scale(v: Vector2, s: float, out: Vector2) -> Vector2:
    '''out = s * v'''
    return out.set(v.x * s, v.y * s)


def dot(v1: Vector2, v2: Vector2) -> float:
    '''Scalar product v1 . v2'''
    return v1.x * v2.x + v1.y * v2.y


def magnitude(v: Vector2) -> float:
    '''Euclidean length sqrt(v . v)'''
    return math.sqrt(v.x * v.x + v.y * v.y)


#--------------------------------------------------------------------#
# -- Periodic (Torus) Helpers -- #
#--------------------------------------------------------------------#

def minimumImage(delta: float, size: float) -> float:
    '''
    Signed minimum-image separation along one axis.

    Parameters:
    -----------
    delta : float
        Raw coordinate difference [m]
    size : float
        Torus extent along the axis [m]

    Returns:
    --------
    float : Separation in [-size/2, size/2)
    '''
    half = 0.5 * size
    # Python's % on floats is already non-negative for size > 0
    return (delta + half) % size - half


def periodicSub(v1: Vector2, v2: Vector2, size: Vector2, out: Vector2) -> Vector2:
    '''
    Signed minimum-image difference v1 - v2 on a torus.

    Parameters:
    -----------
    v1, v2 : Vector2
        Points on the torus [m]
    size : Vector2
        Torus extent (sizeX, sizeY) [m]
    out : Vector2
        Output vector

    Returns:
    --------
    Vector2 : out
    '''
    return out.set(
        minimumImage(v1.x - v2.x, size.x),
        minimumImage(v1.y - v2.y, size.y),
    )


def periodicDistance(v1: Vector2, v2: Vector2, size: Vector2, out: Vector2) -> Vector2:
    '''
    Per-axis absolute minimum-image separation between two points.

    Has the same magnitude as periodicSub but discards direction.

    Parameters:
    -----------
    v1, v2 : Vector2
        Points on the torus [m]
    size : Vector2
        Torus extent (sizeX, sizeY) [m]
    out : Vector2
        Output vector

    Returns:
    --------
    Vector2 : out
    '''
    periodicSub(v1, v2, size, out)
    return out.set(abs(out.x), abs(out.y))


def wrapCoordinate(value: float, size: float) -> float:
    '''Map a coordinate into [0, size).'''
    wrapped = value % size
    # -1e-18 % 1.0 rounds to 1.0
    if wrapped >= size:
        return 0.0
    return wrapped


def wrapPosition(v: Vector2, size: Vector2, out: Vector2) -> Vector2:
    '''out = (v.x mod size.x, v.y mod size.y)'''
    return out.set(wrapCoordinate(v.x, size.x), wrapCoordinate(v.y, size.y))
