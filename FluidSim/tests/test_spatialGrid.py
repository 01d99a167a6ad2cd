# -- Spatial Grid Tests -- #

'''
Bucket sizing, insert bounds policy and 3x3 neighbour traversal on
open and periodic grids.

Sean Bowman [10/19/2026]
'''

import itertools

import pytest

from FluidSim.sph.spatialGrid import OutOfDomainError, SpatialGrid
from FluidSim.sph.vector2 import Vector2


H = 0.015


class Item:
    def __init__(self, x, y):
        self.position = Vector2(x, y)


class CollectFold:
    '''Records (candidate, separation) pairs.'''

    def fold(self, candidate, separation, state):
        state.append((candidate, separation.copy()))
        return state


def neighborsOf(grid, target):
    return grid.enumerateNeighbors(target, CollectFold(), [])


def testOpenGridCounts():
    grid = SpatialGrid(1.0, 0.5, 0.125)
    assert grid.countX == 8
    assert grid.countY == 4
    assert grid.cellSize == (0.125, 0.125)
    assert not grid.periodic


def testOpenGridCoversDomain():
    grid = SpatialGrid(0.9, 0.6, H)
    assert grid.countX * H >= 0.9
    assert grid.countY * H >= 0.6
    assert (grid.countX - 1) * H < 0.9


def testPeriodicCellsAreNeverNarrowerThanH():
    grid = SpatialGrid(0.1, 0.05, 0.03, periodic=True)
    assert grid.countX == 3
    assert grid.countY == 1
    cellWidth, cellHeight = grid.cellSize
    assert cellWidth >= 0.03
    assert cellHeight >= 0.03
    assert cellWidth * grid.countX == pytest.approx(0.1)


@pytest.mark.parametrize('width, height, h', [(0.0, 1.0, 0.1), (1.0, -1.0, 0.1), (1.0, 1.0, 0.0)])
def testRejectsInvalidGeometry(width, height, h):
    with pytest.raises(ValueError):
        SpatialGrid(width, height, h)


def testCellIndexLayout():
    grid = SpatialGrid(0.9, 0.9, H)
    assert grid.cellIndexOf(0.0, 0.0) == 0
    assert grid.cellIndexOf(0.016, 0.0) == 1
    assert grid.cellIndexOf(0.0, 0.016) == grid.countX


def testUpperEdgeMapsToLastCell():
    grid = SpatialGrid(0.9, 0.9, H)
    assert grid.cellIndexOf(0.9, 0.9) == grid.countX * grid.countY - 1


@pytest.mark.parametrize('x, y', [(-0.001, 0.5), (0.5, 0.9001), (1.5, -3.0)])
def testOpenGridRejectsOutOfDomainInsert(x, y):
    grid = SpatialGrid(0.9, 0.9, H)
    with pytest.raises(OutOfDomainError):
        grid.insert(x, y, Item(x, y))
    with pytest.raises(IndexError):
        grid.cellIndexOf(x, y)


def testPeriodicGridWrapsInsert():
    grid = SpatialGrid(0.9, 0.9, H, periodic=True)
    assert grid.cellIndexOf(-0.001, 0.5) == grid.cellIndexOf(0.899, 0.5)
    assert grid.cellIndexOf(0.95, 1.85) == grid.cellIndexOf(0.05, 0.05)


def testClearEmptiesBuckets():
    grid = SpatialGrid(0.9, 0.9, H)
    for i in range(5):
        grid.insert(0.1 * i, 0.1, Item(0.1 * i, 0.1))
    assert grid.nEntries == 5
    grid.clear()
    assert grid.nEntries == 0


@pytest.mark.parametrize('periodic', [False, True])
def testInsertedItemReportedExactlyOnce(periodic):
    grid = SpatialGrid(0.9, 0.9, H, periodic=periodic)
    item = Item(0.3, 0.3)
    grid.insert(0.3, 0.3, item)

    offsets = [-0.0149, -0.007, 0.0, 0.007, 0.0149]
    for dx, dy in itertools.product(offsets, offsets):
        if dx * dx + dy * dy >= H * H:
            continue
        found = neighborsOf(grid, Item(0.3 + dx, 0.3 + dy))
        assert [c for c, _ in found] == [item]


def testFarItemsAreSkipped():
    grid = SpatialGrid(0.9, 0.9, H)
    near = Item(0.50, 0.50)
    far = Item(0.53, 0.50)
    corner = Item(0.515, 0.512)
    for item in (near, far, corner):
        grid.insert(item.position.x, item.position.y, item)

    found = [c for c, _ in neighborsOf(grid, Item(0.505, 0.5))]
    assert near in found
    assert far not in found
    assert corner not in found


def testSelfIsReportedWithZeroSeparation():
    grid = SpatialGrid(0.9, 0.9, H)
    item = Item(0.2, 0.2)
    grid.insert(0.2, 0.2, item)

    found = neighborsOf(grid, item)
    assert len(found) == 1
    assert found[0][1] == Vector2(0.0, 0.0)


def testSeparationIsTargetMinusCandidate():
    grid = SpatialGrid(0.9, 0.9, H)
    other = Item(0.21, 0.2)
    grid.insert(0.21, 0.2, other)

    (_, separation), = neighborsOf(grid, Item(0.2, 0.2))
    assert separation.x == pytest.approx(-0.01)
    assert separation.y == pytest.approx(0.0)


def testOpenGridDoesNotWrapAcrossEdges():
    grid = SpatialGrid(0.9, 0.9, H)
    item = Item(0.899, 0.45)
    grid.insert(0.899, 0.45, item)

    assert neighborsOf(grid, Item(0.001, 0.45)) == []


def testPeriodicNeighborAcrossSeam():
    grid = SpatialGrid(0.9, 0.9, H, periodic=True)
    item = Item(0.895, 0.45)
    grid.insert(0.895, 0.45, item)

    found = neighborsOf(grid, Item(0.005, 0.45))
    assert len(found) == 1
    candidate, separation = found[0]
    assert candidate is item
    assert separation.x == pytest.approx(0.01)
    assert separation.y == pytest.approx(0.0)


def testPeriodicNeighborAcrossCorner():
    grid = SpatialGrid(0.9, 0.9, H, periodic=True)
    item = Item(0.896, 0.896)
    grid.insert(0.896, 0.896, item)

    (candidate, separation), = neighborsOf(grid, Item(0.002, 0.002))
    assert candidate is item
    assert separation.x == pytest.approx(0.006)
    assert separation.y == pytest.approx(0.006)


def testNarrowPeriodicGridVisitsEachBucketOnce():
    # A single column wraps onto itself
    grid = SpatialGrid(0.02, 0.9, H, periodic=True)
    assert grid.countX == 1

    item = Item(0.001, 0.3)
    grid.insert(0.001, 0.3, item)

    found = neighborsOf(grid, Item(0.019, 0.3))
    assert len(found) == 1
    assert found[0][1].x == pytest.approx(-0.002)


def testFoldStateIsThreaded():
    class CountFold:
        def fold(self, candidate, separation, state):
            return state + 1

    grid = SpatialGrid(0.9, 0.9, H)
    for i in range(4):
        grid.insert(0.3 + 0.002 * i, 0.3, Item(0.3 + 0.002 * i, 0.3))

    assert grid.enumerateNeighbors(Item(0.303, 0.3), CountFold(), 10) == 14


@pytest.mark.parametrize('periodic', [False, True])
@pytest.mark.parametrize('x, y', [(float('nan'), 0.5), (0.5, float('inf'))])
def testNonFiniteInsertIsRejected(periodic, x, y):
    grid = SpatialGrid(0.9, 0.9, H, periodic=periodic)
    with pytest.raises(OutOfDomainError):
        grid.insert(x, y, Item(x, y))
    assert grid.nEntries == 0
