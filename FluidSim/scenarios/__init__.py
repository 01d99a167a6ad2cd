# -- Simulation Scenarios Package -- #

'''
Pre-configured scenes for the SPH fluid solver.

Each scenario builds an Environment, spawns its fluid and kinematic
particles, and returns a ready-to-run SphSolver.

Sean Bowman [10/19/2026]
'''

from FluidSim.scenarios.damBreak import DamBreakConfig, Rectangle, createDamBreak
from FluidSim.scenarios.periodicBox import PeriodicBoxConfig, createPeriodicBox
