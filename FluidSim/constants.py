# -- Physical Constants for the SPH Fluid Simulation -- #

'''
Physical and numerical defaults for the real-time SPH fluid.
All values in SI units unless otherwise noted.

Sean Bowman [10/19/2026]
'''

#--------------------------------------------------------------------#
# -- Fluid Properties -- #
#--------------------------------------------------------------------#

# Rest density rho_0 [kg/m^3]
referenceDensity: float = 1000.0

# Pressure stiffness k in p = k * (rho - rho_0) [m^2/s^2]
stiffness: float = 100.0

# Per-particle viscosity coefficient
viscosity: float = 1.0

# Gravitational acceleration (applied along -y) [m/s^2]
gravity: float = 9.8

#--------------------------------------------------------------------#
# -- SPH Numerical Parameters -- #
#--------------------------------------------------------------------#

# Particle size = initial inter-particle spacing [m]
particleSize: float = 0.01

# Support radius to particle size ratio, h = ratio * particleSize
supportRadiusRatio: float = 1.5

# Fixed time step [s]
timeDelta: float = 1.0e-3

# Viscosity singularity guard, r^2 + eta * h^2
viscosityEta: float = 0.01

#--------------------------------------------------------------------#
# -- Domain and Host Defaults -- #
#--------------------------------------------------------------------#

# Simulation domain extent [m]
domainWidth: float = 0.9
domainHeight: float = 0.9

# Boundary policy: 'open' (deactivate on exit) or 'periodic' (wrap)
boundaryPolicy: str = 'open'

# Solver ticks per displayed frame
stepsPerFrame: int = 5

# Kinematic wall thickness in particle sizes
wallThicknessParticles: int = 4
