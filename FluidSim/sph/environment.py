# -- SPH Environment -- #

'''
Physical constants and the spatial grid for one simulation run.

The Environment is created once per run and is read-only afterwards:
the support radius h fixes the grid cell size, so changing any of
the constants means building a new Environment.

Configuration errors (non-positive sizes, unknown boundary policy,
...) are raised at construction, never in the middle of a step.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import json
import math

from FluidSim import constants as const
from FluidSim.sph.kernels import Poly6Kernel
from FluidSim.sph.particles import Particle
from FluidSim.sph.spatialGrid import SpatialGrid
from FluidSim.sph.vector2 import Vector2


BOUNDARY_POLICIES = ('open', 'periodic')


class Environment:
    '''
    Immutable bundle of SPH constants plus the neighbour grid.

    Parameters:
    -----------
    domainWidth : float
        Domain width [m]
    domainHeight : float
        Domain height [m]
    particleSize : float
        Particle spacing [m]; h = 1.5 * particleSize
    boundaryPolicy : str
        'open' (particles leaving the domain are deactivated) or
        'periodic' (positions wrap on a torus)
    stiffness : float
        Pressure stiffness k [m^2/s^2]
    density0 : float
        Rest density rho_0 [kg/m^3]
    viscosity : float
        Default per-particle viscosity
    gravity : tuple[float, float]
        Gravitational acceleration [m/s^2]
    timeDelta : float
        Fixed time step [s]

    Raises:
    -------
    ValueError : If any parameter is out of range
    '''

    def __init__(
        self,
        domainWidth: float = const.domainWidth,
        domainHeight: float = const.domainHeight,
        particleSize: float = const.particleSize,
        boundaryPolicy: str = const.boundaryPolicy,
        stiffness: float = const.stiffness,
        density0: float = const.referenceDensity,
        viscosity: float = const.viscosity,
        gravity: tuple[float, float] = (0.0, -const.gravity),
        timeDelta: float = const.timeDelta,
    ) -> None:
        for name, value in (
            ('domainWidth', domainWidth),
            ('domainHeight', domainHeight),
            ('particleSize', particleSize),
            ('density0', density0),
            ('timeDelta', timeDelta),
        ):
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f'{name} must be a positive finite number, got {value}')

        for name, value in (('stiffness', stiffness), ('viscosity', viscosity)):
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f'{name} must be a non-negative finite number, got {value}')

        if len(gravity) != 2 or not all(math.isfinite(g) for g in gravity):
            raise ValueError(f'gravity must be a finite 2-vector, got {gravity}')

        if boundaryPolicy not in BOUNDARY_POLICIES:
            raise ValueError(
                f'Unknown boundary policy: {boundaryPolicy} '
                f'(expected one of {", ".join(BOUNDARY_POLICIES)})'
            )

        self._particleSize = particleSize
        self._h = const.supportRadiusRatio * particleSize
        self._stiffness = stiffness
        self._density0 = density0
        self._viscosity = viscosity
        # 2D particle area times rest density
        self._mass = particleSize * particleSize * density0
        self._gravity = (float(gravity[0]), float(gravity[1]))
        self._timeDelta = timeDelta
        self._boundaryPolicy = boundaryPolicy

        self._kernel = Poly6Kernel(self._h)
        self._grid: SpatialGrid[Particle] = SpatialGrid(
            domainWidth,
            domainHeight,
            self._h,
            periodic=(boundaryPolicy == 'periodic'),
        )

    ######################################################################
    # -- Loaders -- #
    ######################################################################

    @classmethod
    def fromDict(cls, data: dict) -> Environment:
        '''
        Build an Environment from a plain configuration mapping.

        Reads the 'domain', 'sph' and 'fluid' sections; every key is
        optional and falls back to the package defaults.

        Parameters:
        -----------
        data : dict
            Parsed configuration

        Returns:
        --------
        Environment : Validated environment
        '''
        domainSection = data.get('domain', {})
        sphSection = data.get('sph', {})
        fluidSection = data.get('fluid', {})

        gravityMag = fluidSection.get('gravity', const.gravity)

        return cls(
            domainWidth=domainSection.get('width', const.domainWidth),
            domainHeight=domainSection.get('height', const.domainHeight),
            boundaryPolicy=domainSection.get('boundaryPolicy', const.boundaryPolicy),
            particleSize=sphSection.get('particleSize', const.particleSize),
            timeDelta=sphSection.get('timeDelta', const.timeDelta),
            stiffness=fluidSection.get('stiffness', const.stiffness),
            density0=fluidSection.get('density', const.referenceDensity),
            viscosity=fluidSection.get('viscosity', const.viscosity),
            gravity=(0.0, -gravityMag),
        )

    @classmethod
    def fromJson(cls, configPath: str) -> Environment:
        '''
        Load an Environment from a JSON configuration file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON file

        Returns:
        --------
        Environment : Validated environment
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)
        return cls.fromDict(data)

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def particleSize(self) -> float:
        '''Particle spacing [m].'''
        return self._particleSize

    @property
    def h(self) -> float:
        '''Kernel support radius [m].'''
        return self._h

    @property
    def stiffness(self) -> float:
        '''Pressure stiffness k.'''
        return self._stiffness

    @property
    def density0(self) -> float:
        '''Rest density [kg/m^3].'''
        return self._density0

    @property
    def viscosity(self) -> float:
        '''Default particle viscosity.'''
        return self._viscosity

    @property
    def mass(self) -> float:
        '''Default particle mass particleSize^2 * density0 [kg].'''
        return self._mass

    @property
    def gravity(self) -> Vector2:
        '''Gravitational acceleration (copy) [m/s^2].'''
        return Vector2(*self._gravity)

    @property
    def timeDelta(self) -> float:
        '''Fixed time step [s].'''
        return self._timeDelta

    @property
    def boundaryPolicy(self) -> str:
        '''Either 'open' or 'periodic'.'''
        return self._boundaryPolicy

    @property
    def periodic(self) -> bool:
        '''True under the periodic boundary policy.'''
        return self._boundaryPolicy == 'periodic'

    @property
    def domainWidth(self) -> float:
        '''Domain width [m].'''
        return self._grid.width

    @property
    def domainHeight(self) -> float:
        '''Domain height [m].'''
        return self._grid.height

    @property
    def kernel(self) -> Poly6Kernel:
        '''Smoothing kernel for this support radius.'''
        return self._kernel

    @property
    def grid(self) -> SpatialGrid[Particle]:
        '''Neighbour grid sized to the domain.'''
        return self._grid

    def contains(self, x: float, y: float) -> bool:
        '''True if (x, y) lies in the closed domain [0, width] x [0, height].'''
        return 0.0 <= x <= self._grid.width and 0.0 <= y <= self._grid.height

    def toDict(self) -> dict:
        '''Configuration mapping accepted by fromDict.'''
        return {
            'domain': {
                'width': self.domainWidth,
                'height': self.domainHeight,
                'boundaryPolicy': self._boundaryPolicy,
            },
            'sph': {
                'particleSize': self._particleSize,
                'timeDelta': self._timeDelta,
            },
            'fluid': {
                'stiffness': self._stiffness,
                'density': self._density0,
                'viscosity': self._viscosity,
                'gravity': -self._gravity[1],
            },
        }
