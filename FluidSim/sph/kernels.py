# -- SPH Smoothing Kernel -- #

'''
Poly6 smoothing kernel for 2D SPH interpolation.

The kernel W(r) weights the contribution of a neighbour at distance r
to a field estimate at a particle. It has compact support: W = 0 for
r >= h, so only particles inside the support radius interact.

    alpha   = 4 / (pi * h^8)
    W(r)    = alpha * (h^2 - r^2)^3                  for r < h
    gradW   = -6 * alpha * (h^2 - r^2)^2 * rVec      for r < h

The same gradient is used for the pressure and the viscosity terms;
there is no separate viscosity kernel.

References:
-----------
Mueller et al. (2003) -- Particle-based fluid simulation for
    interactive applications

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from FluidSim.sph.vector2 import Vector2


######################################################################
# -- Kernel Protocol -- #
######################################################################

class SphKernel(Protocol):
    '''Protocol for SPH smoothing kernels with a fixed support radius.'''

    @property
    def supportRadius(self) -> float:
        '''Support radius h [m].'''
        ...

    def evaluate(self, r: float) -> float:
        '''Kernel value W(r) [1/m^2].'''
        ...

    def gradient(self, rVec: Vector2, out: Vector2 | None = None) -> Vector2:
        '''Kernel gradient for separation rVec = r_i - r_j.'''
        ...


######################################################################
# -- Poly6 Kernel -- #
######################################################################

class Poly6Kernel:
    '''
    Poly6 kernel parameterised by its support radius.

    Parameters:
    -----------
    h : float
        Support radius [m], must be positive and finite

    Raises:
    -------
    ValueError : If h is not a positive finite number
    '''

    def __init__(self, h: float) -> None:
        if not math.isfinite(h) or h <= 0.0:
            raise ValueError(f'Kernel support radius must be positive, got {h}')

        self._h = h
        self._hSq = h * h
        self._alpha = 4.0 / (math.pi * h ** 8)

    @property
    def supportRadius(self) -> float:
        '''Support radius h [m].'''
        return self._h

    @property
    def alpha(self) -> float:
        '''Normalisation constant 4 / (pi * h^8).'''
        return self._alpha

    def evaluate(self, r: float) -> float:
        '''
        Evaluate W(r).

        Parameters:
        -----------
        r : float
            Distance between particles [m]

        Returns:
        --------
        float : Kernel value, zero for r >= h
        '''
        if r < self._h:
            diff = self._hSq - r * r
            return self._alpha * diff * diff * diff
        return 0.0

    def gradient(self, rVec: Vector2, out: Vector2 | None = None) -> Vector2:
        '''
        Evaluate the kernel gradient c * rVec.

        Parameters:
        -----------
        rVec : Vector2
            Separation r_i - r_j [m]
        out : Vector2 | None
            Output vector; a new one is allocated when omitted

        Returns:
        --------
        Vector2 : Gradient, the zero vector for |rVec| >= h
        '''
        if out is None:
            out = Vector2()

        x = rVec.x
        y = rVec.y
        r = math.sqrt(x * x + y * y)
        if r < self._h:
            diff = self._hSq - r * r
            c = -6.0 * self._alpha * diff * diff
            return out.set(c * x, c * y)
        return out.set(0.0, 0.0)

    def evaluateBatch(self, distances: np.ndarray) -> np.ndarray:
        '''
        Evaluate W(r) for an array of distances.

        Parameters:
        -----------
        distances : np.ndarray
            Distances [m], any shape

        Returns:
        --------
        np.ndarray : Kernel values, same shape as distances
        '''
        distances = np.asarray(distances, dtype=float)
        # Clamping h^2 - r^2 at zero handles the r >= h branch
        diff = np.maximum(self._hSq - distances * distances, 0.0)
        return self._alpha * diff ** 3
