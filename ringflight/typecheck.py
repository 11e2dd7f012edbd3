"""Package-wide runtime type checking.

Every ringflight module decorates with this ``beartype`` rather than the bare
library one. It follows the PEP 484 numeric tower, so a ``float`` hint also
accepts ``int``: ``sim.step(dt=1)`` and ``AircraftConfig(mass=1000)`` are
valid calls.
"""

from beartype import BeartypeConf
from beartype import beartype as _beartype

beartype = _beartype(conf=BeartypeConf(is_pep484_tower=True))
