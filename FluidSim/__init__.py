# -- FluidSim Package -- #

'''
Real-time 2D fluid simulation using Smoothed Particle Hydrodynamics (SPH).

Fixed-step solver with kinematic wall particles, a uniform neighbour
grid on an open or periodic domain, and a command-line host that
records and plots the run.

Sean Bowman [10/19/2026]
'''

__version__ = '0.1.0'

from FluidSim.sph.environment import Environment
from FluidSim.sph.solver import SphSolver
from FluidSim.scenarios.damBreak import DamBreakConfig
from FluidSim.export.frameExporter import FrameExporter
