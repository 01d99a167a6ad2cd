# -- SPH Engine Package -- #

'''
Core Smoothed Particle Hydrodynamics (SPH) engine.

Provides the vector type, the Poly6 kernel, the neighbour grid, the
particle store, the run environment, and the solver.

Sean Bowman [10/19/2026]
'''

from FluidSim.sph.protocols import NeighborFold, SimulationState
from FluidSim.sph.kernels import Poly6Kernel
from FluidSim.sph.spatialGrid import OutOfDomainError, SpatialGrid
from FluidSim.sph.particles import Particle, ParticleSnapshot, ParticleStore
from FluidSim.sph.environment import Environment
from FluidSim.sph.solver import DensityFold, ForceFold, SphSolver
