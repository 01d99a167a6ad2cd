# -- Environment Tests -- #

'''
Derived constants, validation and JSON loading of the run environment.

Sean Bowman [10/19/2026]
'''

import json
import math

import pytest

from FluidSim.sph.environment import Environment


def testDefaults():
    env = Environment()
    assert env.particleSize == 0.01
    assert env.h == pytest.approx(0.015)
    assert env.mass == pytest.approx(0.1)
    assert env.stiffness == 100.0
    assert env.density0 == 1000.0
    assert env.viscosity == 1.0
    assert env.timeDelta == 0.001
    assert env.gravity.asTuple() == (0.0, -9.8)
    assert env.boundaryPolicy == 'open'
    assert not env.periodic
    assert (env.domainWidth, env.domainHeight) == (0.9, 0.9)


def testKernelAndGridMatchSupportRadius():
    env = Environment(boundaryPolicy='periodic')
    assert env.kernel.supportRadius == env.h
    assert env.grid.h == env.h
    assert env.grid.periodic


def testGravityIsACopy():
    env = Environment()
    env.gravity.set(0.0, 0.0)
    assert env.gravity.y == -9.8


@pytest.mark.parametrize('kwargs', [
    {'domainWidth': 0.0},
    {'domainHeight': -1.0},
    {'particleSize': 0.0},
    {'particleSize': math.nan},
    {'density0': 0.0},
    {'timeDelta': -0.001},
    {'timeDelta': math.inf},
    {'stiffness': -1.0},
    {'viscosity': math.nan},
    {'gravity': (0.0, math.inf)},
    {'gravity': (0.0,)},
    {'boundaryPolicy': 'reflective'},
])
def testRejectsInvalidConfiguration(kwargs):
    with pytest.raises(ValueError):
        Environment(**kwargs)


def testZeroStiffnessAndViscosityAreAllowed():
    env = Environment(stiffness=0.0, viscosity=0.0)
    assert env.stiffness == 0.0
    assert env.viscosity == 0.0


def testContainsIsClosed():
    env = Environment(domainWidth=0.5, domainHeight=0.4)
    assert env.contains(0.0, 0.0)
    assert env.contains(0.5, 0.4)
    assert not env.contains(0.5001, 0.2)
    assert not env.contains(0.2, -0.0001)


def testFromDictUsesDefaultsForMissingKeys():
    env = Environment.fromDict({'domain': {'width': 0.5, 'boundaryPolicy': 'periodic'}})
    assert env.domainWidth == 0.5
    assert env.domainHeight == 0.9
    assert env.periodic
    assert env.stiffness == 100.0


def testFromJson(tmp_path):
    config = {
        'domain': {'width': 0.6, 'height': 0.3, 'boundaryPolicy': 'open'},
        'sph': {'particleSize': 0.02, 'timeDelta': 0.0005},
        'fluid': {'stiffness': 50.0, 'density': 998.0, 'viscosity': 0.5, 'gravity': 9.81},
    }
    path = tmp_path / 'env.json'
    path.write_text(json.dumps(config))

    env = Environment.fromJson(str(path))
    assert env.h == pytest.approx(0.03)
    assert env.mass == pytest.approx(0.02 * 0.02 * 998.0)
    assert env.gravity.y == -9.81
    assert env.toDict() == config


def testFromDictValidates():
    with pytest.raises(ValueError):
        Environment.fromDict({'sph': {'particleSize': -0.01}})
