# -- Dam Break Scenario -- #

'''
Wall-enclosed dam break.

A block of fluid rests against the left wall of an open-topped
container built from kinematic particles. Released at t = 0, the
column collapses under gravity and surges across the container floor.

The scenario creates:
1. A fluid block in the lower-left corner of the container interior
2. Bottom, left and right walls, each wallThicknessParticles thick
3. An Environment and SphSolver with the scene's domain and policy

Layout (original preset, all in metres):
    interior   (0.1, 0.1) to (0.7, 0.5)
    fluid      (0.1, 0.1) to (0.3, 0.5)    20 x 40 particles
    walls      4 * particleSize thick, outer extent x in [0.06, 0.74], y >= 0.06

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

from FluidSim import constants as const
from FluidSim.sph.environment import Environment
from FluidSim.sph.solver import SphSolver


######################################################################
# -- Rectangle -- #
######################################################################

@dataclass(frozen=True)
class Rectangle:
    '''
    Axis-aligned spawn region.

    Parameters:
    -----------
    left, bottom : float
        Lower-left corner [m]
    width, height : float
        Extent [m]
    '''

    left: float
    bottom: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def top(self) -> float:
        return self.bottom + self.height


######################################################################
# -- Dam Break Configuration -- #
######################################################################

@dataclass
class DamBreakConfig:
    '''
    Configuration for a dam break scenario.

    Parameters:
    -----------
    offset : float
        Lower-left corner of the container interior (x = y) [m]
    innerWidth : float
        Container interior width [m]
    innerHeight : float
        Container wall height [m]
    fluidWidth : float
        Initial fluid column width [m]
    fluidHeight : float
        Initial fluid column height [m]
    wallThicknessParticles : int
        Wall thickness in particle sizes
    domainWidth : float
        Simulation domain width [m]
    domainHeight : float
        Simulation domain height [m]
    particleSize : float
        Particle spacing [m]
    boundaryPolicy : str
        'open' or 'periodic'
    nFrames : int
        Number of displayed frames the runner advances
    stepsPerFrame : int
        Solver ticks per frame
    '''

    offset: float = 0.1
    innerWidth: float = 0.6
    innerHeight: float = 0.4
    fluidWidth: float = 0.2
    fluidHeight: float = 0.4
    wallThicknessParticles: int = const.wallThicknessParticles
    domainWidth: float = const.domainWidth
    domainHeight: float = const.domainHeight
    particleSize: float = const.particleSize
    boundaryPolicy: str = const.boundaryPolicy
    nFrames: int = 36
    stepsPerFrame: int = const.stepsPerFrame

    @classmethod
    def original(cls) -> DamBreakConfig:
        '''
        Interactive demo scene.

        800 fluid + 592 wall particles, 36 frames of 5 ticks (180 ticks).
        '''
        return cls()

    @classmethod
    def small(cls) -> DamBreakConfig:
        '''
        Small tank for quick testing.

        ~200 fluid particles, runs in a few seconds.
        '''
        return cls(
            offset=0.05,
            innerWidth=0.3,
            innerHeight=0.2,
            fluidWidth=0.1,
            fluidHeight=0.2,
            domainWidth=0.45,
            domainHeight=0.45,
            nFrames=20,
        )

    @classmethod
    def fromPreset(cls, name: str) -> DamBreakConfig:
        '''
        Look up a preset by name.

        Raises:
        -------
        ValueError : If the preset name is unknown
        '''
        presets = {
            'original': cls.original,
            'small': cls.small,
        }
        if name not in presets:
            raise ValueError(
                f'Unknown dam break preset: {name} '
                f'(expected one of {", ".join(presets)})'
            )
        return presets[name]()

    @property
    def wallThickness(self) -> float:
        '''Wall thickness [m].'''
        return self.wallThicknessParticles * self.particleSize

    def fluidRegion(self) -> Rectangle:
        '''Initial fluid column.'''
        return Rectangle(self.offset, self.offset, self.fluidWidth, self.fluidHeight)

    def wallRegions(self) -> list[Rectangle]:
        '''Bottom, left and right wall rectangles.'''
        t = self.wallThickness
        inner = Rectangle(self.offset, self.offset, self.innerWidth, self.innerHeight)
        return [
            Rectangle(inner.left - t, inner.bottom - t, inner.width + 2.0 * t, t),
            Rectangle(inner.left - t, inner.bottom, t, inner.height),
            Rectangle(inner.right, inner.bottom, t, inner.height),
        ]


######################################################################
# -- Scenario Creation -- #
######################################################################

def createDamBreak(config: DamBreakConfig, environment: Environment | None = None) -> SphSolver:
    '''
    Build a ready-to-run dam break solver.

    Parameters:
    -----------
    config : DamBreakConfig
        Scenario configuration
    environment : Environment | None
        Pre-built environment (e.g. from a JSON file). When given, its
        domain, particle size and policy replace the config's.

    Returns:
    --------
    SphSolver : Solver holding the fluid column and the walls

    Raises:
    -------
    ValueError : If the scene does not fit an open domain
    '''
    if environment is None:
        environment = Environment(
            domainWidth=config.domainWidth,
            domainHeight=config.domainHeight,
            particleSize=config.particleSize,
            boundaryPolicy=config.boundaryPolicy,
        )
    else:
        config.domainWidth = environment.domainWidth
        config.domainHeight = environment.domainHeight
        config.particleSize = environment.particleSize
        config.boundaryPolicy = environment.boundaryPolicy

    solver = SphSolver(environment)

    fluid = config.fluidRegion()
    solver.spawnInRectangle(fluid.left, fluid.bottom, fluid.width, fluid.height)

    for wall in config.wallRegions():
        solver.spawnInRectangle(wall.left, wall.bottom, wall.width, wall.height, kinematic=True)

    return solver
