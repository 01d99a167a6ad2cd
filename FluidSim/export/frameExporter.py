# -- Simulation Frame Exporter -- #

'''
Exports SPH simulation frames as JSON for playback.

Collects getParticles() snapshots during a run and writes them, with
the energy history and the Environment configuration, to a single
JSON file.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Iterable

import numpy as np

from FluidSim.sph.environment import Environment
from FluidSim.sph.particles import ParticleSnapshot
from FluidSim.sph.protocols import SimulationState


class FrameExporter:
    '''
    Collects and exports simulation frame data as JSON.

    Usage:
        exporter = FrameExporter()
        # Once per displayed frame:
        exporter.addFrame(solver.currentState, solver.getParticles())
        # After the run:
        exporter.export(solver.environment, outputDir='output')

    Output JSON format:
    {
        "meta": { "type": "fluidSim", "nFrames": 36, "created": "...", ... },
        "config": { "domain": {...}, "sph": {...}, "fluid": {...} },
        "frames": [
            {
                "time": 0.005,
                "step": 5,
                "positions": [[x0, y0], [x1, y1], ...],
                "kinematic": [false, true, ...]
            },
            ...
        ],
        "energy": {
            "times": [...],
            "kinetic": [...],
            "potential": [...],
            "total": [...]
        }
    }
    '''

    def __init__(self) -> None:
        self._frames: list[dict] = []
        self._energyHistory: dict[str, list[float]] = {
            'times': [],
            'kinetic': [],
            'potential': [],
            'total': [],
        }

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    @property
    def frames(self) -> list[dict]:
        '''Collected frame records.'''
        return self._frames

    @property
    def energyHistory(self) -> dict[str, list[float]]:
        '''Energy series keyed by 'times', 'kinetic', 'potential', 'total'.'''
        return self._energyHistory

    def addFrame(self, state: SimulationState, particles: Iterable[ParticleSnapshot]) -> None:
        '''
        Record a simulation frame.

        Parameters:
        -----------
        state : SimulationState
            Diagnostics at the frame
        particles : Iterable[ParticleSnapshot]
            Active particle snapshots
        '''
        snapshots = list(particles)
        positions = np.array([s.position for s in snapshots], dtype=float).reshape(-1, 2)

        frame = {
            'time': round(state.time, 6),
            'step': state.step,
            'positions': np.round(positions, 6).tolist(),
            'kinematic': [s.kinematic for s in snapshots],
        }
        self._frames.append(frame)

        self._energyHistory['times'].append(round(state.time, 6))
        self._energyHistory['kinetic'].append(round(state.kineticEnergy, 6))
        self._energyHistory['potential'].append(round(state.potentialEnergy, 6))
        self._energyHistory['total'].append(round(state.totalEnergy, 6))

    def export(
        self,
        environment: Environment,
        outputDir: str = 'FluidSim/output',
        scenarioName: str = 'damBreak',
    ) -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        environment : Environment
            Run configuration for metadata
        outputDir : str
            Output directory path
        scenarioName : str
            Scenario name for the filename

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'fluidSim_{scenarioName}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        output = {
            'meta': {
                'type': 'fluidSim',
                'scenario': scenarioName,
                'nFrames': len(self._frames),
                'nParticles': len(self._frames[0]['positions']) if self._frames else 0,
                'particleSize': environment.particleSize,
                'created': datetime.now().isoformat(),
            },
            'config': environment.toDict(),
            'frames': self._frames,
            'energy': self._energyHistory,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath
