# -- Export Package -- #

'''
Frame export for playback of recorded runs.

Sean Bowman [10/19/2026]
'''

from FluidSim.export.frameExporter import FrameExporter
