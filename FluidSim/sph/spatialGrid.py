# -- Uniform Spatial Grid for Neighbor Search -- #

'''
Bucket grid for fixed-radius neighbour queries in 2D SPH.

The domain is divided into cells at least as wide as the kernel
support radius h. Any particle within h of a query point then lies
in the 3x3 block of cells around the query cell, so a query visits
at most 9 buckets.

Cell indices of the 3x3 block are always wrapped with a Euclidean
modulo. On an open grid this only adds far-away candidates that the
distance test rejects; on a periodic grid, combined with the
minimum-image separation, it gives a true torus topology.

The grid holds borrowed references only. It is cleared and refilled
once per tick.

References:
-----------
Green (2010) -- Particle Simulation using CUDA
Ihmsen et al. (2011) -- Parallel Neighbor-Search for SPH

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math
from typing import Generic, TypeVar

from FluidSim.sph.protocols import HasPosition, NeighborFold, StateT
from FluidSim.sph.vector2 import Vector2, minimumImage, wrapCoordinate


ItemT = TypeVar('ItemT', bound=HasPosition)


class OutOfDomainError(IndexError):
    '''Raised for a point outside an open grid's domain, or a non-finite point.'''


class SpatialGrid(Generic[ItemT]):
    '''
    Uniform bucket grid over a rectangular, optionally periodic domain.

    Open grid: countX = ceil(width / h), cells of size h.
    Periodic grid: countX = max(floor(width / h), 1), cells stretched
    to width / countX so they tile the torus exactly without any cell
    narrower than h.

    Parameters:
    -----------
    width : float
        Domain width [m]
    height : float
        Domain height [m]
    h : float
        Kernel support radius [m]
    periodic : bool
        Wrap coordinates and use minimum-image separations

    Raises:
    -------
    ValueError : If width, height or h is not a positive finite number
    '''

    def __init__(self, width: float, height: float, h: float, periodic: bool = False) -> None:
        for name, value in (('width', width), ('height', height), ('h', h)):
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f'Grid {name} must be positive, got {value}')

        self._width = width
        self._height = height
        self._h = h
        self._periodic = periodic
        self._size = Vector2(width, height)

        if periodic:
            self._countX = max(math.floor(width / h), 1)
            self._countY = max(math.floor(height / h), 1)
            self._cellWidth = width / self._countX
            self._cellHeight = height / self._countY
        else:
            self._countX = math.ceil(width / h)
            self._countY = math.ceil(height / h)
            self._cellWidth = h
            self._cellHeight = h

        self._buckets: list[list[ItemT]] = [[] for _ in range(self._countX * self._countY)]

        # Wrapped 3-wide stencils per column / row, duplicates removed
        # so narrow grids never visit a bucket twice
        self._columnStencils = [
            self._stencil(i, self._countX) for i in range(self._countX)
        ]
        self._rowStencils = [
            self._stencil(j, self._countY) for j in range(self._countY)
        ]

        # Scratch separation vector handed to folds
        self._separation = Vector2()

    @staticmethod
    def _stencil(index: int, count: int) -> tuple[int, ...]:
        '''Distinct wrapped indices index-1, index, index+1.'''
        stencil: list[int] = []
        for offset in (-1, 0, 1):
            wrapped = (index + offset) % count
            if wrapped not in stencil:
                stencil.append(wrapped)
        return tuple(stencil)

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def width(self) -> float:
        '''Domain width [m].'''
        return self._width

    @property
    def height(self) -> float:
        '''Domain height [m].'''
        return self._height

    @property
    def size(self) -> Vector2:
        '''Domain extent as a vector (copy).'''
        return self._size.copy()

    @property
    def h(self) -> float:
        '''Search radius [m].'''
        return self._h

    @property
    def periodic(self) -> bool:
        '''True if the grid wraps around both axes.'''
        return self._periodic

    @property
    def countX(self) -> int:
        '''Number of cell columns.'''
        return self._countX

    @property
    def countY(self) -> int:
        '''Number of cell rows.'''
        return self._countY

    @property
    def cellSize(self) -> tuple[float, float]:
        '''Cell extent (width, height) [m].'''
        return (self._cellWidth, self._cellHeight)

    @property
    def nEntries(self) -> int:
        '''Total number of references currently stored.'''
        return sum(len(bucket) for bucket in self._buckets)

    ######################################################################
    # -- Indexing -- #
    ######################################################################

    def _cellCoords(self, x: float, y: float) -> tuple[int, int]:
        '''
        Integer cell coordinates of a point.

        Periodic grids wrap the point first. Open grids reject points
        outside [0, width] x [0, height]; the closed upper edge maps to
        the last cell. Non-finite points are rejected by both.
        '''
        if self._periodic:
            if not (math.isfinite(x) and math.isfinite(y)):
                raise OutOfDomainError(f'Point ({x}, {y}) is not finite')
            x = wrapCoordinate(x, self._width)
            y = wrapCoordinate(y, self._height)
        elif not (0.0 <= x <= self._width and 0.0 <= y <= self._height):
            raise OutOfDomainError(
                f'Point ({x}, {y}) lies outside the grid domain '
                f'[0, {self._width}] x [0, {self._height}]'
            )

        ix = min(int(x // self._cellWidth), self._countX - 1)
        iy = min(int(y // self._cellHeight), self._countY - 1)
        return ix, iy

    def cellIndexOf(self, x: float, y: float) -> int:
        '''
        Flat bucket index ix + iy * countX of a point.

        Raises:
        -------
        OutOfDomainError : If the point is outside an open grid's domain
        '''
        ix, iy = self._cellCoords(x, y)
        return ix + iy * self._countX

    ######################################################################
    # -- Building -- #
    ######################################################################

    def clear(self) -> None:
        '''Empty every bucket in place.'''
        for bucket in self._buckets:
            bucket.clear()

    def insert(self, x: float, y: float, item: ItemT) -> None:
        '''
        Append an item to the bucket containing (x, y).

        Parameters:
        -----------
        x, y : float
            Item position [m]
        item : ItemT
            Reference to store

        Raises:
        -------
        OutOfDomainError : If the point is outside an open grid's domain
        '''
        self._buckets[self.cellIndexOf(x, y)].append(item)

    ######################################################################
    # -- Queries -- #
    ######################################################################

    def enumerateNeighbors(self, target: HasPosition, fold: NeighborFold[StateT], state: StateT) -> StateT:
        '''
        Fold over every stored item within h of the target.

        Visits the 3x3 block of cells around the target's cell. For
        each candidate the separation target - candidate is computed
        (minimum image on periodic grids); candidates with
        |separation| >= h are skipped. The target itself is reported
        with a zero separation if it is stored in the grid.

        Parameters:
        -----------
        target : HasPosition
            Query item
        fold : NeighborFold
            Reducer called as fold.fold(candidate, separation, state)
        state : StateT
            Initial state

        Returns:
        --------
        StateT : Final state after all neighbours were folded in
        '''
        position = target.position
        px = position.x
        py = position.y
        ix, iy = self._cellCoords(px, py)

        h = self._h
        periodic = self._periodic
        width = self._width
        height = self._height
        countX = self._countX
        buckets = self._buckets
        separation = self._separation
        columns = self._columnStencils[ix]

        for j in self._rowStencils[iy]:
            rowOffset = j * countX
            for i in columns:
                for candidate in buckets[i + rowOffset]:
                    other = candidate.position
                    if periodic:
                        dx = minimumImage(px - other.x, width)
                        dy = minimumImage(py - other.y, height)
                    else:
                        dx = px - other.x
                        dy = py - other.y

                    if math.sqrt(dx * dx + dy * dy) >= h:
                        continue

                    separation.x = dx
                    separation.y = dy
                    state = fold.fold(candidate, separation, state)

        return state
