"""wastesim simulates a municipal waste-collection round. A fleet of trucks works through a fixed list of streets on a discrete event simulation core (des), and the run's time, distance and weight figures are priced in a cost report.
"""
from wastesim.des import *
from wastesim.dist import *
from wastesim.config import ConfigurationError, SimulationConfig
from wastesim.log_cfg import log_config, logger
from wastesim.runner import SimulationResult, replications_frame, run, simulate

__version__ = "1.0.0"
