# -- Fluid Simulation Runner -- #

'''
Command-line host for the SPH fluid solver.

Builds a scenario, advances the solver a fixed number of ticks per
displayed frame, reports progress, and optionally exports the frames
and writes Plotly figures.

Usage:
    fluidsim                                      # Original dam break scene
    fluidsim --preset small                       # Small dam break
    fluidsim --scenario periodic                  # Fluid in a periodic box
    fluidsim --config configs/damBreak.json
    fluidsim --no-export --plot                   # Figures only

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import argparse
import json
import os
import time as timeModule

from tqdm import tqdm

from FluidSim.export.frameExporter import FrameExporter
from FluidSim.scenarios.damBreak import DamBreakConfig, createDamBreak
from FluidSim.scenarios.periodicBox import PeriodicBoxConfig, createPeriodicBox
from FluidSim.sph.environment import Environment
from FluidSim.sph.solver import SphSolver
from FluidSim.visualization.particlePlots import (
    plotDensityField,
    plotEnergyHistory,
    plotParticles,
)


SCENARIOS = ('damBreak', 'periodic')


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='FluidSim -- real-time 2D SPH fluid',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file',
    )
    parser.add_argument(
        '--scenario', type=str, default='damBreak',
        choices=list(SCENARIOS),
        help='Simulation scenario (default: damBreak)',
    )
    parser.add_argument(
        '--preset', type=str, default='original',
        choices=['original', 'small'],
        help='Dam break preset (default: original)',
    )
    parser.add_argument(
        '--frames', type=int, default=None,
        help='Number of displayed frames (default: scenario setting)',
    )
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--output-dir', type=str, default='FluidSim/output',
        help='Output directory for exported frames and figures (default: FluidSim/output)',
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Write particle, density and energy figures as HTML',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class FluidSimRunner:
    '''
    Runs an SPH scene frame by frame and stores the results.

    Handles the full pipeline: scenario setup, the steps-per-frame
    loop with progress reporting, optional frame export and figures.
    '''

    def __init__(self) -> None:
        self._exporter: FrameExporter = FrameExporter()

    @property
    def exporter(self) -> FrameExporter:
        '''Frames collected so far.'''
        return self._exporter

    def runFromConfig(
        self,
        configPath: str,
        doExport: bool = True,
        exportDir: str = 'FluidSim/output',
        plot: bool = False,
    ) -> dict:
        '''
        Run a scene from a JSON configuration file.

        The 'domain', 'sph' and 'fluid' sections build the Environment;
        'simulation' selects the scenario and frame counts; 'scene'
        overrides the scenario layout.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file
        doExport : bool
            Whether to export frame data
        exportDir : str
            Output directory
        plot : bool
            Whether to write HTML figures

        Returns:
        --------
        dict : Run summary

        Raises:
        -------
        ValueError : If the scenario name is unknown
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        env = Environment.fromDict(data)
        simSection = data.get('simulation', {})
        sceneSection = data.get('scene', {})
        scenario = simSection.get('scenario', 'damBreak')

        if scenario == 'damBreak':
            sceneConfig = DamBreakConfig(**sceneSection)
            solver = createDamBreak(sceneConfig, env)
        elif scenario == 'periodic':
            sceneConfig = PeriodicBoxConfig(**sceneSection)
            solver = createPeriodicBox(sceneConfig, env)
        else:
            raise ValueError(
                f'Unknown scenario: {scenario} (expected one of {", ".join(SCENARIOS)})'
            )

        return self.run(
            solver,
            scenarioName=scenario,
            nFrames=simSection.get('nFrames', sceneConfig.nFrames),
            stepsPerFrame=simSection.get('stepsPerFrame', sceneConfig.stepsPerFrame),
            doExport=doExport,
            exportDir=exportDir,
            plot=plot,
        )

    def run(
        self,
        solver: SphSolver,
        scenarioName: str,
        nFrames: int,
        stepsPerFrame: int,
        doExport: bool = True,
        exportDir: str = 'FluidSim/output',
        plot: bool = False,
    ) -> dict:
        '''
        Advance a prepared solver and report on it.

        Parameters:
        -----------
        solver : SphSolver
            Solver with its particles already spawned
        scenarioName : str
            Name used in banners and output filenames
        nFrames : int
            Number of displayed frames
        stepsPerFrame : int
            Solver ticks per frame
        doExport : bool
            Whether to export frame data
        exportDir : str
            Output directory
        plot : bool
            Whether to write HTML figures

        Returns:
        --------
        dict : Run summary
        '''
        env = solver.environment
        particles = solver.particles

        print()
        print('=' * 62)
        print(f'  FLUIDSIM -- SPH {scenarioName.upper()} SIMULATION')
        print('=' * 62)
        print()

        #--------------------------------------------------------------------#
        # Scenario Setup
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  SCENARIO SETUP')
        print('-' * 62)
        print(f'  Domain:            {env.domainWidth:6.3f} x {env.domainHeight:6.3f} m')
        print(f'  Boundary Policy:   {env.boundaryPolicy:>8s}')
        print(f'  Particle Size:     {env.particleSize:8.4f} m')
        print(f'  Support Radius:    {env.h:8.4f} m')
        print(f'  Particle Mass:     {env.mass:8.4f} kg')
        print(f'  Time Step:         {env.timeDelta:8.1e} s')
        print(f'  Grid Cells:        {env.grid.countX:4d} x {env.grid.countY:<4d}')
        print(f'  Fluid Particles:   {particles.nFluid:8d}')
        print(f'  Wall Particles:    {particles.nKinematic:8d}')
        print(f'  Frames:            {nFrames:8d} x {stepsPerFrame} ticks')
        print()

        self._exporter.addFrame(solver.currentState, solver.getParticles())

        #--------------------------------------------------------------------#
        # Simulation Loop
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  RUNNING SIMULATION')
        print('-' * 62)

        history = []
        wallClockStart = timeModule.time()

        for _ in tqdm(range(nFrames), desc='  Frames', unit='frame'):
            state = solver.advance(stepsPerFrame)
            self._exporter.addFrame(state, solver.getParticles())
            history.append(state)

        wallClockSeconds = timeModule.time() - wallClockStart

        print()
        print(f'  {"Time":>8}  {"Step":>8}  {"Active":>8}  {"MaxVel":>8}  {"DensErr":>8}  {"Energy":>10}')
        print(f'  {"(s)":>8}  {"":>8}  {"":>8}  {"(m/s)":>8}  {"(%)":>8}  {"(J)":>10}')
        print('  ' + '-' * 58)
        printEvery = max(1, nFrames // 10)
        for i, state in enumerate(history):
            if i % printEvery == 0 or i == len(history) - 1:
                print(
                    f'  {state.time:8.4f}  {state.step:8d}  {state.nActive:8d}  '
                    f'{state.maxVelocity:8.4f}  {state.maxDensityError * 100:8.3f}  '
                    f'{state.totalEnergy:10.6f}'
                )

        finalState = solver.currentState
        timings = solver.stageTimings

        print()
        print(f'  Simulation complete.')
        print(f'  Total steps:       {finalState.step:8d}')
        print(f'  Wall-clock time:   {wallClockSeconds:8.1f} s')
        for stage, seconds in timings.items():
            print(f'    {stage + ":":17s}{seconds:8.2f} s')
        print(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        print()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath = None
        if doExport:
            print('-' * 62)
            print('  EXPORTING FRAME DATA')
            print('-' * 62)

            exportPath = self._exporter.export(
                environment=env,
                outputDir=exportDir,
                scenarioName=scenarioName,
            )
            print(f'  Exported to: {exportPath}')
            print()

        figurePaths: list[str] = []
        if plot:
            print('-' * 62)
            print('  WRITING FIGURES')
            print('-' * 62)

            os.makedirs(exportDir, exist_ok=True)
            figures = {
                'particles': plotParticles(
                    solver.getParticles(), env,
                    title=f'{scenarioName} at t = {finalState.time:.3f} s',
                ),
                'density': plotDensityField(solver.getParticles(), env),
                'energy': plotEnergyHistory(self._exporter.energyHistory),
            }
            for name, fig in figures.items():
                path = os.path.join(exportDir, f'fluidSim_{scenarioName}_{name}.html')
                fig.write_html(path)
                figurePaths.append(path)
                print(f'  Saved: {path}')
            print()

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        print('=' * 62)
        print('  SIMULATION SUMMARY')
        print('=' * 62)
        print(f'  Active Particles:  {finalState.nActive:8d}')
        print(f'  Final KE:          {finalState.kineticEnergy:10.6f} J')
        print(f'  Final PE:          {finalState.potentialEnergy:10.6f} J')
        print(f'  Final Total E:     {finalState.totalEnergy:10.6f} J')
        print(f'  Max Density Error: {finalState.maxDensityError * 100:8.3f} %')
        print(f'  Max Velocity:      {finalState.maxVelocity:8.4f} m/s')
        print('=' * 62)
        print()

        return {
            'finalState': finalState,
            'wallClockSeconds': wallClockSeconds,
            'stageTimings': timings,
            'nFrames': self._exporter.nFrames,
            'exportPath': exportPath,
            'figurePaths': figurePaths,
        }


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: list[str] | None = None) -> None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    runner = FluidSimRunner()
    doExport = not args.no_export

    if args.config:
        runner.runFromConfig(
            args.config, doExport=doExport, exportDir=args.output_dir, plot=args.plot,
        )
        return

    if args.scenario == 'periodic':
        sceneConfig = PeriodicBoxConfig()
        solver = createPeriodicBox(sceneConfig)
    else:
        sceneConfig = DamBreakConfig.fromPreset(args.preset)
        solver = createDamBreak(sceneConfig)

    runner.run(
        solver,
        scenarioName=args.scenario,
        nFrames=args.frames if args.frames is not None else sceneConfig.nFrames,
        stepsPerFrame=sceneConfig.stepsPerFrame,
        doExport=doExport,
        exportDir=args.output_dir,
        plot=args.plot,
    )


if __name__ == '__main__':
    main()
