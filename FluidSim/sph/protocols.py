# -- SPH Simulation Protocols -- #

'''
Protocols and result dataclasses shared by the SPH engine.

Defines the neighbour-fold strategy used by the spatial grid
traversal and the SimulationState diagnostics snapshot returned
by the solver.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from FluidSim.sph.vector2 import Vector2


StateT = TypeVar('StateT')


######################################################################
# -- Grid Item Protocol -- #
######################################################################

class HasPosition(Protocol):
    '''Anything the spatial grid can store: an object with a position.'''

    position: Vector2


######################################################################
# -- Neighbor Fold Protocol -- #
######################################################################

class NeighborFold(Protocol[StateT]):
    '''
    Reducer applied to every neighbour found by a grid traversal.

    One implementation exists per solver pass (density, force), so a
    single traversal routine serves both passes.
    '''

    def fold(self, candidate: HasPosition, separation: Vector2, state: StateT) -> StateT:
        '''
        Combine one neighbour into the running state.

        Parameters:
        -----------
        candidate : HasPosition
            Neighbouring item within the support radius
        separation : Vector2
            target.position - candidate.position [m]. Scratch vector
            owned by the grid; valid only for the duration of the call.
        state : StateT
            Running state

        Returns:
        --------
        StateT : Updated state
        '''
        ...


######################################################################
# -- Simulation State -- #
######################################################################

@dataclass
class SimulationState:
    '''
    Diagnostics snapshot of the simulation at a given time.

    Parameters:
    -----------
    time : float
        Simulated time [s]
    step : int
        Number of completed ticks
    nActive : int
        Active particles (fluid + kinematic)
    nFluid : int
        Active fluid (non-kinematic) particles
    kineticEnergy : float
        Total kinetic energy of fluid particles [J]
    potentialEnergy : float
        Gravitational potential energy of fluid particles [J]
    maxVelocity : float
        Maximum fluid velocity magnitude [m/s]
    maxDensityError : float
        Maximum relative density error |rho - rho_0| / rho_0
    '''

    time: float
    step: int
    nActive: int
    nFluid: int
    kineticEnergy: float
    potentialEnergy: float
    maxVelocity: float
    maxDensityError: float

    @property
    def totalEnergy(self) -> float:
        '''Total mechanical energy (KE + PE) [J].'''
        return self.kineticEnergy + self.potentialEnergy
