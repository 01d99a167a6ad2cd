# -- Particle Visualizations -- #

'''
Plotly-based interactive plots of SPH particle snapshots.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

from typing import Iterable

import numpy as np
import plotly.graph_objects as go

from FluidSim.sph.environment import Environment
from FluidSim.sph.particles import ParticleSnapshot
from FluidSim.visualization import theme


def _domainOutline(fig: go.Figure, environment: Environment) -> None:
    fig.add_shape(
        type='rect',
        x0=0.0, y0=0.0,
        x1=environment.domainWidth, y1=environment.domainHeight,
        line=dict(color=theme.REFERENCE_LINE, dash='dash', width=1),
    )


def plotParticles(
    particles: Iterable[ParticleSnapshot],
    environment: Environment,
    title: str = 'Particles',
) -> go.Figure:
    '''
    Scatter plot of fluid and wall particles.

    Parameters:
    -----------
    particles : Iterable[ParticleSnapshot]
        Active particle snapshots (e.g. solver.getParticles())
    environment : Environment
        Domain extent and particle size
    title : str
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    snapshots = list(particles)
    positions = np.array([s.position for s in snapshots], dtype=float).reshape(-1, 2)
    kinematic = np.array([s.kinematic for s in snapshots], dtype=bool)

    fig = go.Figure()

    for mask, name, color in (
        (~kinematic, 'Fluid', theme.FLUID),
        (kinematic, 'Wall', theme.WALL),
    ):
        fig.add_trace(go.Scatter(
            x=positions[mask, 0], y=positions[mask, 1],
            mode='markers', name=name,
            marker=dict(color=color, size=4),
        ))

    _domainOutline(fig, environment)

    fig.update_layout(
        title=title,
        xaxis_title='x (m)',
        yaxis_title='y (m)',
        template=theme.TEMPLATE,
        height=600,
        yaxis=dict(scaleanchor='x', scaleratio=1),
    )

    return fig


def densityField(
    particles: Iterable[ParticleSnapshot],
    environment: Environment,
    resolution: int = 90,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    '''
    Kernel-summed density on a regular sample grid.

    rho(x) = sum_j m * W(|x - x_j|), over every active particle,
    with the minimum-image distance on periodic domains.

    Parameters:
    -----------
    particles : Iterable[ParticleSnapshot]
        Active particle snapshots
    environment : Environment
        Kernel, mass and domain
    resolution : int
        Samples along the longer domain side

    Returns:
    --------
    tuple[np.ndarray, np.ndarray, np.ndarray] :
        Sample x coordinates, y coordinates, density (ny, nx) [kg/m^3]
    '''
    width = environment.domainWidth
    height = environment.domainHeight
    spacing = max(width, height) / resolution
    xs = np.arange(0.5 * spacing, width, spacing)
    ys = np.arange(0.5 * spacing, height, spacing)
    xx, yy = np.meshgrid(xs, ys, indexing='xy')
    samples = np.column_stack([xx.ravel(), yy.ravel()])

    positions = np.array([s.position for s in particles], dtype=float).reshape(-1, 2)
    density = np.zeros(len(samples))

    for start in range(0, len(positions), 256):
        chunk = positions[start:start + 256]
        delta = samples[:, np.newaxis, :] - chunk[np.newaxis, :, :]
        if environment.periodic:
            size = np.array([width, height])
            delta = (delta + 0.5 * size) % size - 0.5 * size
        distances = np.linalg.norm(delta, axis=2)
        density += environment.mass * environment.kernel.evaluateBatch(distances).sum(axis=1)

    return xs, ys, density.reshape(len(ys), len(xs))


def plotDensityField(
    particles: Iterable[ParticleSnapshot],
    environment: Environment,
    resolution: int = 90,
    title: str = 'Density Field',
) -> go.Figure:
    '''
    Heatmap of the kernel-summed density.

    Parameters:
    -----------
    particles : Iterable[ParticleSnapshot]
        Active particle snapshots
    environment : Environment
        Kernel, mass and domain
    resolution : int
        Samples along the longer domain side
    title : str
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    xs, ys, density = densityField(particles, environment, resolution)

    fig = go.Figure()

    fig.add_trace(go.Heatmap(
        x=xs, y=ys, z=density,
        colorscale=theme.DENSITY_COLORSCALE,
        colorbar=dict(title='rho (kg/m^3)'),
        zmin=0.0, zmax=1.5 * environment.density0,
    ))

    _domainOutline(fig, environment)

    fig.update_layout(
        title=title,
        xaxis_title='x (m)',
        yaxis_title='y (m)',
        template=theme.TEMPLATE,
        height=600,
        yaxis=dict(scaleanchor='x', scaleratio=1),
    )

    return fig


def plotEnergyHistory(energy: dict[str, list[float]]) -> go.Figure:
    '''
    Kinetic, potential and total energy against time.

    Parameters:
    -----------
    energy : dict[str, list[float]]
        Mapping with 'times', 'kinetic', 'potential' and 'total' lists

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    fig = go.Figure()

    for key, name, color in (
        ('kinetic', 'Kinetic', theme.KINETIC),
        ('potential', 'Potential', theme.POTENTIAL),
        ('total', 'Total', theme.TOTAL),
    ):
        fig.add_trace(go.Scatter(
            x=energy['times'], y=energy[key],
            mode='lines', name=name,
            line=dict(color=color, width=2),
        ))

    fig.update_layout(
        title='Fluid Energy',
        xaxis_title='Time (s)',
        yaxis_title='Energy (J)',
        template=theme.TEMPLATE,
        height=400,
    )

    return fig
