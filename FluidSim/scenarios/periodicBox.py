# -- Periodic Box Scenario -- #

'''
Fluid on a kinematic floor in a doubly periodic box.

The floor spans the full box width, so it closes on itself across the
x seam. The fluid block is centred on the seam: half of it starts at
the right edge of the box and half at the left, and the two halves
only see each other through the wrapped neighbour search.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

from FluidSim import constants as const
from FluidSim.sph.environment import Environment
from FluidSim.sph.solver import SphSolver


@dataclass
class PeriodicBoxConfig:
    '''
    Configuration for the periodic box.

    Parameters:
    -----------
    boxWidth : float
        Box width [m]
    boxHeight : float
        Box height [m]
    fluidWidth : float
        Fluid block width, centred on the x seam [m]
    fluidHeight : float
        Fluid block height above the floor [m]
    floorThicknessParticles : int
        Floor thickness in particle sizes
    particleSize : float
        Particle spacing [m]
    nFrames : int
        Number of displayed frames the runner advances
    stepsPerFrame : int
        Solver ticks per frame
    '''

    boxWidth: float = 0.3
    boxHeight: float = 0.3
    fluidWidth: float = 0.1
    fluidHeight: float = 0.1
    floorThicknessParticles: int = const.wallThicknessParticles
    particleSize: float = const.particleSize
    nFrames: int = 20
    stepsPerFrame: int = const.stepsPerFrame

    @property
    def floorThickness(self) -> float:
        '''Floor thickness [m].'''
        return self.floorThicknessParticles * self.particleSize


def createPeriodicBox(config: PeriodicBoxConfig, environment: Environment | None = None) -> SphSolver:
    '''
    Build a ready-to-run periodic box solver.

    Parameters:
    -----------
    config : PeriodicBoxConfig
        Scenario configuration
    environment : Environment | None
        Pre-built periodic environment; its domain and particle size
        replace the config's

    Returns:
    --------
    SphSolver : Solver on a periodic Environment

    Raises:
    -------
    ValueError : If the given environment is not periodic
    '''
    if environment is None:
        environment = Environment(
            domainWidth=config.boxWidth,
            domainHeight=config.boxHeight,
            particleSize=config.particleSize,
            boundaryPolicy='periodic',
        )
    elif not environment.periodic:
        raise ValueError(
            f'Periodic box needs a periodic environment, got {environment.boundaryPolicy!r}'
        )
    else:
        config.boxWidth = environment.domainWidth
        config.boxHeight = environment.domainHeight
        config.particleSize = environment.particleSize

    solver = SphSolver(environment)

    floor = config.floorThickness
    solver.spawnInRectangle(0.0, 0.0, config.boxWidth, floor, kinematic=True)

    # Straddles x = 0; positions wrap onto the torus
    solver.spawnInRectangle(
        config.boxWidth - 0.5 * config.fluidWidth,
        floor,
        config.fluidWidth,
        config.fluidHeight,
    )

    return solver
