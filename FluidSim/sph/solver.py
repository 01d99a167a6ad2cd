# -- SPH Solver -- #

'''
Fixed-step SPH solver for a 2D particle fluid.

Algorithm per tick:
    1. Rebuild the neighbour grid from the active particles
    2. Density by kernel summation (self-contribution included),
       pressure p = max(k * (rho - rho_0), 0)
    3. Accelerations: symmetric pressure term, viscosity term (same
       Poly6 gradient), plus gravity
    4. Leapfrog-style integration of non-kinematic particles, then
       the boundary policy (periodic wrap or open removal)

Kinematic particles take part in stages 1 and 2 and act as fixed
pressure sources for their neighbours, but are never moved.

The solver is single-threaded and synchronous. All scratch vectors
are owned by the solver (or its grid), so independent solver
instances can coexist.

Non-finite values are not checked inside the density and force
passes. A particle whose position becomes NaN stays active and
visible under either boundary policy (periodic wrapping turns inf
into NaN; an open domain removes inf as an exit). The next step()
raises FloatingPointError before the grid is touched, leaving the
particles and the previous grid as they were.

References:
-----------
Mueller et al. (2003) -- Particle-based fluid simulation for
    interactive applications
Monaghan (1992) -- Smoothed Particle Hydrodynamics

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math
import time as timeModule

from FluidSim import constants as const
from FluidSim.sph.environment import Environment
from FluidSim.sph.kernels import Poly6Kernel
from FluidSim.sph.particles import Particle, ParticleStore, ParticleView
from FluidSim.sph.protocols import SimulationState
from FluidSim.sph.vector2 import Vector2, wrapCoordinate


######################################################################
# -- Neighbor Folds -- #
######################################################################

class DensityFold:
    '''
    Sums kernel-weighted neighbour masses into a density.

    state is the running density [kg/m^3].
    '''

    def __init__(self, kernel: Poly6Kernel) -> None:
        self._kernel = kernel

    def fold(self, candidate: Particle, separation: Vector2, state: float) -> float:
        x = separation.x
        y = separation.y
        return state + self._kernel.evaluate(math.sqrt(x * x + y * y)) * candidate.mass


class ForceFold:
    '''
    Accumulates pressure and viscosity accelerations on one particle.

    state is the target's force vector, updated in place. Call
    bind() with the target particle before each traversal.

    Parameters:
    -----------
    kernel : Poly6Kernel
        Smoothing kernel
    h : float
        Support radius [m]
    '''

    def __init__(self, kernel: Poly6Kernel, h: float) -> None:
        self._kernel = kernel
        self._etaSq = const.viscosityEta * h * h
        self._target: Particle | None = None
        # Scratch vectors
        self._wp = Vector2()

    def bind(self, target: Particle) -> ForceFold:
        '''Select the particle whose force is being accumulated.'''
        self._target = target
        return self

    def fold(self, candidate: Particle, separation: Vector2, state: Vector2) -> Vector2:
        p = self._target
        if candidate is p:
            return state

        sx = separation.x
        sy = separation.y
        r = math.sqrt(sx * sx + sy * sy)

        # Pressure
        wp = self._kernel.gradient(separation, self._wp)
        fp = -candidate.mass * (
            candidate.pressure / (candidate.density * candidate.density)
            + p.pressure / (p.density * p.density)
        )
        fx = state.x + wp.x * fp
        fy = state.y + wp.y * fp

        # Viscosity
        r2 = r * r + self._etaSq
        dvx = p.velocity.x - candidate.velocity.x
        dvy = p.velocity.y - candidate.velocity.y
        fv = (
            candidate.mass * (p.viscosity + candidate.viscosity)
            / (candidate.density * p.density)
            * (sx * wp.x + sy * wp.y)
            / r2
        )

        return state.set(fx + fv * dvx, fy + fv * dvy)


######################################################################
# -- Solver -- #
######################################################################

class SphSolver:
    '''
    Owns a particle store and advances it through the SPH pipeline.

    Parameters:
    -----------
    environment : Environment
        Constants, kernel and neighbour grid for this run
    particles : ParticleStore | None
        Existing particle store (a new empty store by default)
    '''

    STAGES = ('registerToGrid', 'calculateForce', 'updateVelocity')

    def __init__(self, environment: Environment, particles: ParticleStore | None = None) -> None:
        self._env = environment
        self._particles = particles if particles is not None else ParticleStore()
        self._densityFold = DensityFold(environment.kernel)
        self._forceFold = ForceFold(environment.kernel, environment.h)

        self._time: float = 0.0
        self._step: int = 0
        self._stageTimings: dict[str, float] = {stage: 0.0 for stage in self.STAGES}

    ######################################################################
    # -- Host Interface -- #
    ######################################################################

    def spawnInRectangle(
        self,
        left: float,
        bottom: float,
        width: float,
        height: float,
        particleSize: float | None = None,
        kinematic: bool = False,
    ) -> list[int]:
        '''
        Fill a rectangle with particles spaced by particleSize.

        Under the open policy every particle centre must lie inside the
        closed domain; under the periodic policy spawned positions are
        wrapped onto the torus.

        Parameters:
        -----------
        left, bottom : float
            Lower-left corner [m]
        width, height : float
            Extent [m]
        particleSize : float | None
            Spacing [m] (defaults to the environment's particle size)
        kinematic : bool
            Spawn immovable wall particles

        Returns:
        --------
        list[int] : Slot indices of the new particles

        Raises:
        -------
        ValueError : If the request is invalid or leaves an open domain
        '''
        env = self._env
        if particleSize is None:
            particleSize = env.particleSize

        if not env.periodic:
            # Outermost particle centres; the corner left + width may round past the edge
            xCoords, yCoords = ParticleStore.latticeCoordinates(
                left, bottom, width, height, particleSize,
            )
            if len(xCoords) and len(yCoords) and not (
                env.contains(float(xCoords[0]), float(yCoords[0]))
                and env.contains(float(xCoords[-1]), float(yCoords[-1]))
            ):
                raise ValueError(
                    f'Spawn rectangle ({left}, {bottom}, {width}, {height}) '
                    f'places particles outside the open domain '
                    f'[0, {env.domainWidth}] x [0, {env.domainHeight}]'
                )

        indices = self._particles.spawnInRectangle(
            left, bottom, width, height,
            particleSize=particleSize,
            mass=env.mass,
            viscosity=env.viscosity,
            kinematic=kinematic,
        )

        if env.periodic:
            for index in indices:
                position = self._particles[index].position
                position.set(
                    wrapCoordinate(position.x, env.domainWidth),
                    wrapCoordinate(position.y, env.domainHeight),
                )

        return indices

    def spawnAt(self, x: float, y: float, kinematic: bool = False) -> list[int]:
        '''Spawn one particle in the particleSize square with lower-left corner (x, y).'''
        size = self._env.particleSize
        return self.spawnInRectangle(x, y, size, size, kinematic=kinematic)

    def step(self) -> None:
        '''Advance the simulation by one fixed time step.'''
        timings = self._stageTimings

        start = timeModule.perf_counter()
        self._rebuildGrid()
        afterGrid = timeModule.perf_counter()

        self._computeDensityPressure()
        self._computeForces()
        afterForce = timeModule.perf_counter()

        self._integrate()
        end = timeModule.perf_counter()

        timings['registerToGrid'] += afterGrid - start
        timings['calculateForce'] += afterForce - afterGrid
        timings['updateVelocity'] += end - afterForce

        self._time += self._env.timeDelta
        self._step += 1

    def advance(self, nSteps: int = const.stepsPerFrame) -> SimulationState:
        '''
        Run several ticks, as a host does once per displayed frame.

        Parameters:
        -----------
        nSteps : int
            Number of ticks

        Returns:
        --------
        SimulationState : Diagnostics after the last tick
        '''
        for _ in range(nSteps):
            self.step()
        return self.currentState

    def getParticles(self) -> ParticleView:
        '''Lazy read-only snapshot view of the active particles.'''
        return self._particles.snapshot()

    def resetStageTimings(self) -> None:
        '''Zero the accumulated stage wall-clock timings.'''
        for stage in self.STAGES:
            self._stageTimings[stage] = 0.0

    ######################################################################
    # -- Stage 1: Grid Rebuild -- #
    ######################################################################

    def _rebuildGrid(self) -> None:
        '''
        Clear the grid and insert every active particle.

        Raises:
        -------
        FloatingPointError : If an active particle has a non-finite position
        '''
        active = [p for p in self._particles if p.active]
        for p in active:
            if not (math.isfinite(p.position.x) and math.isfinite(p.position.y)):
                raise FloatingPointError(
                    f'Particle position became non-finite at step {self._step}: {p.position!r}'
                )

        grid = self._env.grid
        grid.clear()
        for p in active:
            grid.insert(p.position.x, p.position.y, p)

    ######################################################################
    # -- Stage 2: Density and Pressure -- #
    ######################################################################

    def _computeDensityPressure(self) -> None:
        '''
        Density and pressure for every active particle.

        rho_i = sum_j m_j * W(|r_i - r_j|), j including i itself
        p_i = max(k * (rho_i - rho_0), 0)

        Kinematic particles are included: the force stage reads the
        density and pressure of every neighbour.
        '''
        grid = self._env.grid
        fold = self._densityFold
        stiffness = self._env.stiffness
        density0 = self._env.density0

        for p in self._particles:
            if not p.active:
                continue
            p.density = grid.enumerateNeighbors(p, fold, 0.0)
            p.pressure = max(stiffness * (p.density - density0), 0.0)

    ######################################################################
    # -- Stage 3: Forces -- #
    ######################################################################

    def _computeForces(self) -> None:
        '''
        Accelerations of every active non-kinematic particle.

        a_i = -sum_j m_j * (p_j/rho_j^2 + p_i/rho_i^2) * gradW_ij
              + sum_j m_j * (mu_i + mu_j) * (r_ij . gradW_ij)
                / (rho_j * rho_i * (|r_ij|^2 + 0.01 h^2)) * v_ij
              + g

        Gravity is an acceleration and is added without mass scaling.
        '''
        grid = self._env.grid
        fold = self._forceFold
        gx, gy = self._env.gravity

        for p in self._particles:
            if not p.active or p.kinematic:
                continue
            force = p.force.set(0.0, 0.0)
            grid.enumerateNeighbors(p, fold.bind(p), force)
            force.set(force.x + gx, force.y + gy)

    ######################################################################
    # -- Stage 4: Integration and Boundary Policy -- #
    ######################################################################

    def _integrate(self) -> None:
        '''
        Semi-implicit update of every active non-kinematic particle.

            v2 += a * dt
            x  += v2 * dt
            v   = v2 + 0.5 * a * dt

        then wrap (periodic) or deactivate on leaving the domain (open).
        Non-finite positions are left in place for the next grid
        rebuild to report.
        '''
        env = self._env
        dt = env.timeDelta
        width = env.domainWidth
        height = env.domainHeight
        periodic = env.periodic
        particles = self._particles

        for index, p in enumerate(particles):
            if not p.active or p.kinematic:
                continue

            force = p.force
            velocity2 = p.velocity2
            position = p.position

            velocity2.set(velocity2.x + force.x * dt, velocity2.y + force.y * dt)
            position.set(position.x + velocity2.x * dt, position.y + velocity2.y * dt)
            p.velocity.set(
                velocity2.x + 0.5 * force.x * dt,
                velocity2.y + 0.5 * force.y * dt,
            )

            if periodic:
                position.set(
                    wrapCoordinate(position.x, width),
                    wrapCoordinate(position.y, height),
                )
            # NaN fails every comparison, so it is never mistaken for an exit
            elif position.x < 0.0 or position.x > width or position.y < 0.0 or position.y > height:
                particles.deactivate(index)

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def currentState(self) -> SimulationState:
        '''Current diagnostics snapshot.'''
        p = self._particles
        gravMag = abs(self._env.gravity.y)

        return SimulationState(
            time=self._time,
            step=self._step,
            nActive=p.nActive,
            nFluid=p.nFluid,
            kineticEnergy=p.kineticEnergy(),
            potentialEnergy=p.potentialEnergy(gravMag),
            maxVelocity=p.maxSpeed(),
            maxDensityError=p.maxDensityError(self._env.density0),
        )

    @property
    def environment(self) -> Environment:
        '''Constants and grid of this run.'''
        return self._env

    @property
    def particles(self) -> ParticleStore:
        '''The particle store advanced by this solver.'''
        return self._particles

    @property
    def time(self) -> float:
        '''Simulated time [s].'''
        return self._time

    @property
    def stepCount(self) -> int:
        '''Number of completed ticks.'''
        return self._step

    @property
    def stageTimings(self) -> dict[str, float]:
        '''Accumulated wall-clock time per pipeline stage [s] (copy).'''
        return dict(self._stageTimings)
