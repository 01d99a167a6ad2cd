# -- Frame Exporter Tests -- #

'''
JSON layout written by the frame exporter.

Sean Bowman [10/19/2026]
'''

import json

from FluidSim.export.frameExporter import FrameExporter
from FluidSim.sph.environment import Environment
from FluidSim.sph.solver import SphSolver


def testExportWritesFramesAndEnergy(tmp_path):
    solver = SphSolver(Environment())
    solver.spawnInRectangle(0.1, 0.1, 0.03, 0.02)
    solver.spawnInRectangle(0.1, 0.05, 0.02, 0.01, kinematic=True)

    exporter = FrameExporter()
    exporter.addFrame(solver.currentState, solver.getParticles())
    for _ in range(2):
        exporter.addFrame(solver.advance(), solver.getParticles())

    assert exporter.nFrames == 3
    path = exporter.export(solver.environment, outputDir=str(tmp_path), scenarioName='unit')
    assert path.startswith(str(tmp_path))

    with open(path, 'r') as f:
        data = json.load(f)

    assert data['meta']['type'] == 'fluidSim'
    assert data['meta']['scenario'] == 'unit'
    assert data['meta']['nFrames'] == 3
    assert data['meta']['nParticles'] == 8
    assert data['config'] == solver.environment.toDict()

    frames = data['frames']
    assert [frame['step'] for frame in frames] == [0, 5, 10]
    assert all(len(frame['positions']) == 8 for frame in frames)
    assert frames[0]['kinematic'] == [False] * 6 + [True] * 2

    energy = data['energy']
    assert len(energy['times']) == 3
    assert energy['kinetic'][0] == 0.0
    assert energy['kinetic'][-1] > 0.0


def testExportWithoutFrames(tmp_path):
    exporter = FrameExporter()
    path = exporter.export(Environment(), outputDir=str(tmp_path))

    with open(path, 'r') as f:
        data = json.load(f)
    assert data['meta']['nParticles'] == 0
    assert data['frames'] == []
