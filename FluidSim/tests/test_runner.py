# -- Runner Smoke Tests -- #

'''
End-to-end runs of the command-line host on small scenes.

Sean Bowman [10/19/2026]
'''

import json
import os

import pytest

from FluidSim.runner import FluidSimRunner, buildParser, main
from FluidSim.scenarios.damBreak import DamBreakConfig, createDamBreak


def testParserDefaults():
    args = buildParser().parse_args([])
    assert args.scenario == 'damBreak'
    assert args.preset == 'original'
    assert args.frames is None
    assert not args.no_export
    assert not args.plot


def testRunSmallDamBreak(tmp_path, capsys):
    solver = createDamBreak(DamBreakConfig.small())
    runner = FluidSimRunner()
    result = runner.run(
        solver,
        scenarioName='damBreak',
        nFrames=2,
        stepsPerFrame=5,
        exportDir=str(tmp_path),
        plot=True,
    )

    assert result['finalState'].step == 10
    assert result['nFrames'] == 3
    assert os.path.exists(result['exportPath'])
    assert len(result['figurePaths']) == 3
    assert all(os.path.exists(path) for path in result['figurePaths'])
    assert set(result['stageTimings']) == {'registerToGrid', 'calculateForce', 'updateVelocity'}

    out = capsys.readouterr().out
    assert 'SIMULATION SUMMARY' in out


def testRunFromConfig(tmp_path):
    config = {
        'simulation': {'scenario': 'periodic', 'nFrames': 1, 'stepsPerFrame': 2},
        'domain': {'width': 0.2, 'height': 0.2, 'boundaryPolicy': 'periodic'},
        'scene': {'fluidWidth': 0.04, 'fluidHeight': 0.04},
    }
    path = tmp_path / 'periodic.json'
    path.write_text(json.dumps(config))

    result = FluidSimRunner().runFromConfig(str(path), doExport=False)
    assert result['finalState'].step == 2
    assert result['finalState'].nFluid == 16
    assert result['exportPath'] is None


def testRunFromConfigRejectsUnknownScenario(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'simulation': {'scenario': 'tsunami'}}))
    with pytest.raises(ValueError):
        FluidSimRunner().runFromConfig(str(path), doExport=False)


def testMainWithPreset(tmp_path, capsys):
    main(['--preset', 'small', '--frames', '1', '--no-export', '--output-dir', str(tmp_path)])
    out = capsys.readouterr().out
    assert 'FLUIDSIM -- SPH DAMBREAK SIMULATION' in out
    assert os.listdir(tmp_path) == []
