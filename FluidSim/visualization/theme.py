# -- Visualization Theme -- #

'''
Centralized dark-mode theme for all FluidSim Plotly visualizations.

Change colors or template here to restyle every plot at once.

Sean Bowman [10/19/2026]
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Particle colors
FLUID = '#42A5F5'
WALL = '#A1887F'

# Energy series
KINETIC = '#EF5350'
POTENTIAL = '#66BB6A'
TOTAL = '#E0E0E0'

# Domain outline
REFERENCE_LINE = '#888888'

# Density field colorscale
DENSITY_COLORSCALE = 'Blues'
