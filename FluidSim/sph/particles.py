# -- SPH Particle Store -- #

'''
Particle records and the store that owns them.

Particles are plain mutable records so the solver passes can update
them in place. Fluid and kinematic (wall/obstacle) particles live in
the same store, distinguished by the kinematic flag.

Deactivated particles are tombstoned: the record stays inactive
forever, but its slot goes onto a free-list and is handed to a fresh
record by a later spawn. Slot indices are therefore stable while a
particle is alive and memory stays bounded under continuous
spawn/removal.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from FluidSim.sph.vector2 import Vector2


######################################################################
# -- Particle Record -- #
######################################################################

@dataclass(eq=False, slots=True)
class Particle:
    '''
    Mutable SPH particle.

    Parameters:
    -----------
    position : Vector2
        Position [m]
    mass : float
        Mass [kg]
    viscosity : float
        Viscosity coefficient
    kinematic : bool
        Immovable wall/obstacle particle
    velocity : Vector2
        Velocity reported for display and viscosity [m/s]
    velocity2 : Vector2
        Integrator (half-step) velocity [m/s]
    force : Vector2
        Per-tick acceleration accumulator [m/s^2]
    density : float
        Density [kg/m^3]
    pressure : float
        Pressure
    active : bool
        False once the particle has been removed
    '''

    position: Vector2
    mass: float
    viscosity: float
    kinematic: bool = False
    velocity: Vector2 = field(default_factory=Vector2)
    velocity2: Vector2 = field(default_factory=Vector2)
    force: Vector2 = field(default_factory=Vector2)
    density: float = 0.0
    pressure: float = 0.0
    active: bool = True


######################################################################
# -- Read-Only Snapshot View -- #
######################################################################

@dataclass(frozen=True)
class ParticleSnapshot:
    '''
    Immutable copy of the render-relevant particle state.

    Parameters:
    -----------
    active : bool
        Activity flag at snapshot time
    position : tuple[float, float]
        Position [m]
    kinematic : bool
        Wall/obstacle flag
    '''

    active: bool
    position: tuple[float, float]
    kinematic: bool


class ParticleView:
    '''
    Lazy, restartable view over the active particles of a store.

    Each iteration walks the store again and yields fresh
    ParticleSnapshot copies, so callers never hold references to the
    solver's mutable records.
    '''

    def __init__(self, particles: list[Particle]) -> None:
        self._particles = particles

    def __iter__(self) -> Iterator[ParticleSnapshot]:
        for p in self._particles:
            if p.active:
                yield ParticleSnapshot(
                    active=True,
                    position=(p.position.x, p.position.y),
                    kinematic=p.kinematic,
                )

    def __len__(self) -> int:
        return sum(1 for p in self._particles if p.active)


######################################################################
# -- Particle Store -- #
######################################################################

class ParticleStore:
    '''
    Arena of particle records with free-list slot reuse.

    Iterating the store yields every slot's current record, active or
    not; passes skip inactive records.
    '''

    def __init__(self) -> None:
        self._particles: list[Particle] = []
        self._freeSlots: list[int] = []

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, index: int) -> Particle:
        return self._particles[index]

    ######################################################################
    # -- Spawning and Removal -- #
    ######################################################################

    def add(self, particle: Particle) -> int:
        '''
        Store a particle, reusing a freed slot when one is available.

        Returns:
        --------
        int : Slot index of the particle
        '''
        if self._freeSlots:
            index = self._freeSlots.pop()
            self._particles[index] = particle
            return index

        self._particles.append(particle)
        return len(self._particles) - 1

    @staticmethod
    def latticeCoordinates(
        left: float,
        bottom: float,
        width: float,
        height: float,
        particleSize: float,
    ) -> tuple[np.ndarray, np.ndarray]:
        '''
        Particle-centre coordinates of a rectangle fill.

            x_i = left + (i + 0.5) * particleSize,   i < round(width / particleSize)
            y_j = bottom + (j + 0.5) * particleSize,  j < round(height / particleSize)

        Returns:
        --------
        tuple[np.ndarray, np.ndarray] : x coordinates, y coordinates [m]

        Raises:
        -------
        ValueError : If any argument is non-finite or out of range
        '''
        values = (left, bottom, width, height, particleSize)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f'Spawn rectangle arguments must be finite, got {values}')
        if width < 0.0 or height < 0.0:
            raise ValueError(f'Spawn rectangle extent must be non-negative, got {width} x {height}')
        if particleSize <= 0.0:
            raise ValueError(f'particleSize must be positive, got {particleSize}')

        nx = round(width / particleSize)
        ny = round(height / particleSize)
        xCoords = left + (np.arange(nx) + 0.5) * particleSize
        yCoords = bottom + (np.arange(ny) + 0.5) * particleSize
        return xCoords, yCoords

    def spawnInRectangle(
        self,
        left: float,
        bottom: float,
        width: float,
        height: float,
        particleSize: float,
        mass: float,
        viscosity: float,
        kinematic: bool = False,
    ) -> list[int]:
        '''
        Fill a rectangle with a regular grid of particles.

        round(width / particleSize) x round(height / particleSize)
        particles are created, each centred in its particleSize cell:
            x = left + (i + 0.5) * particleSize
            y = bottom + (j + 0.5) * particleSize

        Parameters:
        -----------
        left, bottom : float
            Lower-left corner of the rectangle [m]
        width, height : float
            Rectangle extent [m], non-negative
        particleSize : float
            Particle spacing [m], positive
        mass : float
            Mass of each new particle [kg]
        viscosity : float
            Viscosity of each new particle
        kinematic : bool
            Create immovable wall particles

        Returns:
        --------
        list[int] : Slot indices of the new particles

        Raises:
        -------
        ValueError : If any argument is non-finite or out of range
        '''
        if not (math.isfinite(mass) and math.isfinite(viscosity)):
            raise ValueError(f'mass and viscosity must be finite, got {mass}, {viscosity}')
        if mass <= 0.0:
            raise ValueError(f'mass must be positive, got {mass}')

        xCoords, yCoords = self.latticeCoordinates(left, bottom, width, height, particleSize)

        # x-major ordering: i outer, j inner
        xx, yy = np.meshgrid(xCoords, yCoords, indexing='ij')

        indices: list[int] = []
        for x, y in zip(xx.ravel().tolist(), yy.ravel().tolist()):
            particle = Particle(
                position=Vector2(x, y),
                mass=mass,
                viscosity=viscosity,
                kinematic=kinematic,
            )
            indices.append(self.add(particle))

        return indices

    def deactivate(self, index: int) -> None:
        '''
        Permanently deactivate the particle in a slot and free the slot.

        Deactivating an already inactive slot is a no-op.
        '''
        particle = self._particles[index]
        if not particle.active:
            return
        particle.active = False
        self._freeSlots.append(index)

    ######################################################################
    # -- Counts -- #
    ######################################################################

    @property
    def nActive(self) -> int:
        '''Number of active particles.'''
        return sum(1 for p in self._particles if p.active)

    @property
    def nFluid(self) -> int:
        '''Number of active non-kinematic particles.'''
        return sum(1 for p in self._particles if p.active and not p.kinematic)

    @property
    def nKinematic(self) -> int:
        '''Number of active kinematic particles.'''
        return sum(1 for p in self._particles if p.active and p.kinematic)

    @property
    def nFreeSlots(self) -> int:
        '''Number of slots waiting for reuse.'''
        return len(self._freeSlots)

    def activeIndices(self) -> list[int]:
        '''Slot indices of all active particles.'''
        return [i for i, p in enumerate(self._particles) if p.active]

    def snapshot(self) -> ParticleView:
        '''Read-only view of the active particles.'''
        return ParticleView(self._particles)

    ######################################################################
    # -- Array Diagnostics -- #
    ######################################################################

    def _fluid(self) -> list[Particle]:
        return [p for p in self._particles if p.active and not p.kinematic]

    def positionArray(self, includeKinematic: bool = False) -> np.ndarray:
        '''
        Positions of active particles as an (N, 2) array.

        Parameters:
        -----------
        includeKinematic : bool
            Also include wall particles

        Returns:
        --------
        np.ndarray : Positions [m], shape (N, 2)
        '''
        particles = [
            p for p in self._particles
            if p.active and (includeKinematic or not p.kinematic)
        ]
        return np.array(
            [(p.position.x, p.position.y) for p in particles], dtype=float
        ).reshape(-1, 2)

    def velocityArray(self) -> np.ndarray:
        '''Velocities of active fluid particles, shape (N, 2) [m/s].'''
        return np.array(
            [(p.velocity.x, p.velocity.y) for p in self._fluid()], dtype=float
        ).reshape(-1, 2)

    def densityArray(self) -> np.ndarray:
        '''Densities of active fluid particles, shape (N,) [kg/m^3].'''
        return np.array([p.density for p in self._fluid()], dtype=float)

    def massArray(self) -> np.ndarray:
        '''Masses of active fluid particles, shape (N,) [kg].'''
        return np.array([p.mass for p in self._fluid()], dtype=float)

    def kineticEnergy(self) -> float:
        '''
        Total kinetic energy of fluid particles.

        KE = (1/2) * sum_i m_i * |v_i|^2

        Returns:
        --------
        float : Kinetic energy [J]
        '''
        velocities = self.velocityArray()
        speedsSq = np.sum(velocities * velocities, axis=1)
        return float(0.5 * np.sum(self.massArray() * speedsSq))

    def potentialEnergy(self, gravity: float) -> float:
        '''
        Gravitational potential energy of fluid particles.

        PE = sum_i m_i * g * y_i, reference level y = 0.

        Parameters:
        -----------
        gravity : float
            Gravitational acceleration magnitude [m/s^2]

        Returns:
        --------
        float : Potential energy [J]
        '''
        heights = self.positionArray()[:, 1]
        return float(np.sum(self.massArray() * gravity * heights))

    def maxSpeed(self) -> float:
        '''Maximum fluid velocity magnitude [m/s].'''
        velocities = self.velocityArray()
        if len(velocities) == 0:
            return 0.0
        return float(np.max(np.linalg.norm(velocities, axis=1)))

    def maxDensityError(self, referenceDensity: float) -> float:
        '''
        Maximum relative density error among fluid particles.

        Returns max |rho_i - rho_0| / rho_0
        '''
        densities = self.densityArray()
        if len(densities) == 0:
            return 0.0
        return float(np.max(np.abs(densities - referenceDensity) / referenceDensity))
