# -- Scenario Tests -- #

'''
Particle layout of the dam break and periodic box scenes.

Sean Bowman [10/19/2026]
'''

import pytest

from FluidSim.scenarios.damBreak import DamBreakConfig, Rectangle, createDamBreak
from FluidSim.scenarios.periodicBox import PeriodicBoxConfig, createPeriodicBox
from FluidSim.sph.environment import Environment


def testDamBreakWallRegions():
    config = DamBreakConfig.original()
    bottom, left, right = config.wallRegions()

    assert config.wallThickness == pytest.approx(0.04)
    assert bottom.left == pytest.approx(0.06)
    assert bottom.bottom == pytest.approx(0.06)
    assert bottom.width == pytest.approx(0.68)
    assert left == Rectangle(pytest.approx(0.06), 0.1, pytest.approx(0.04), 0.4)
    assert right.left == pytest.approx(0.7)
    assert right.top == pytest.approx(0.5)


def testDamBreakParticleCounts():
    solver = createDamBreak(DamBreakConfig.small())
    particles = solver.particles
    assert particles.nFluid == 10 * 20
    assert particles.nKinematic == 38 * 4 + 2 * 4 * 20
    assert not solver.environment.periodic


def testDamBreakFluidSitsInsideWalls():
    config = DamBreakConfig.original()
    solver = createDamBreak(config)
    for p in solver.particles:
        if not p.kinematic:
            assert 0.1 < p.position.x < 0.3
            assert 0.1 < p.position.y < 0.5


def testDamBreakUsesGivenEnvironment():
    env = Environment(stiffness=50.0)
    config = DamBreakConfig.original()
    solver = createDamBreak(config, env)
    assert solver.environment is env
    assert solver.environment.stiffness == 50.0


def testDamBreakRejectsSceneOutsideOpenDomain():
    config = DamBreakConfig(domainWidth=0.5)
    with pytest.raises(ValueError):
        createDamBreak(config)


def testUnknownPreset():
    assert DamBreakConfig.fromPreset('small') == DamBreakConfig.small()
    with pytest.raises(ValueError):
        DamBreakConfig.fromPreset('huge')


def testPeriodicBoxStraddlesSeam():
    config = PeriodicBoxConfig()
    solver = createPeriodicBox(config)
    particles = solver.particles

    assert solver.environment.periodic
    assert particles.nFluid == 10 * 10
    assert particles.nKinematic == 30 * 4

    xs = [p.position.x for p in particles if not p.kinematic]
    assert all(0.0 <= x < config.boxWidth for x in xs)
    assert sum(x < 0.05 for x in xs) == 50
    assert sum(x > 0.25 for x in xs) == 50


def testPeriodicBoxNeedsPeriodicEnvironment():
    with pytest.raises(ValueError):
        createPeriodicBox(PeriodicBoxConfig(), Environment())


def testPeriodicBoxHoldsFluidOnFloor():
    solver = createPeriodicBox(PeriodicBoxConfig())
    solver.advance(20)
    state = solver.currentState
    assert state.nFluid == 100
    floor = PeriodicBoxConfig().floorThickness
    for p in solver.particles:
        if not p.kinematic:
            assert p.position.y > floor * 0.5
