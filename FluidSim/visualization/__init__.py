# -- Visualization Package -- #

'''
Plotly figures for particle snapshots and run diagnostics.

Sean Bowman [10/19/2026]
'''
