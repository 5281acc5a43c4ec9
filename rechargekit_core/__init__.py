"""
rechargekit_core
================
Core package for RechargeKit v1.0: recharge basin yield and economics.

Who this is for
---------------
Farmers, farm advisors and water managers weighing whether to set land
aside as a groundwater recharge basin. The code is written so that someone
who can read Python (but does not live in code every day) can follow the
arithmetic. Units follow the reference spreadsheet:
- Land in acres, depths in feet, infiltration in inches per day
- Volumes in acre-feet (AF), flows in cfs and gpm
- Money in dollars

What this file does
-------------------
Exposes the calculation core at import time. It is pure Python with no
heavy imports; pandas, ReportLab and OSMnx are only pulled in by the
modules that need them.

Example
-------
>>> import rechargekit_core as rk
>>> r = rk.evaluate(rk.DEFAULT_INPUTS)
>>> round(r.seasonal_af)
200

"""

from .config import DEFAULT_INPUTS, RechargeInputs
from .engine import RechargeResult, compute
from .parity import DEFAULT_PARITY, ParityFactors, adjust, evaluate
from .version import __version__

__all__ = [
    "__version__",
    "RechargeInputs",
    "DEFAULT_INPUTS",
    "RechargeResult",
    "compute",
    "ParityFactors",
    "DEFAULT_PARITY",
    "adjust",
    "evaluate",
]
