# -- Fountain Jet Package -- #

'''
Droplet pool, jet emitter, basin collision and ripple events.

Sean Bowman [02/12/2026]
'''

from heronsFountain.jet.basin import BasinGeometry
from heronsFountain.jet.particles import ParticlePool, ParticleSnapshot
from heronsFountain.jet.ripples import RippleBuffer, RippleEvent
from heronsFountain.jet.jetSystem import JetSubsystem, JetTickReport
