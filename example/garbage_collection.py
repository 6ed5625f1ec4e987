"""
Weekly Garbage Collection Round

This example runs the collection district of wastesim.street_data with:
- 2 garbage trucks leaving the depot one minute apart
- 3 crew members per truck
- Goal: estimate the weekly operating cost and its spread over replications

PROCESS FLOW (per truck):
    1. Take the first street of the table nobody has taken yet
    2. Service its households (or drive back out when it has none)
    3. Move between houses and handle the sorted-waste containers
    4. Release the street and go to step 1 until the table is exhausted

KEY METRICS:
    - Total distance, working hours and collected weight
    - Fuel, salary, parking and disposal cost
    - Time spent on a single street (histogram)
"""
import logging

import matplotlib.pyplot as plt

import wastesim
from wastesim.log_cfg import LogConfig
from wastesim.report import print_report


# =============================================================================
# CONFIGURATION
# =============================================================================

# Show run start/finish messages on the console
LogConfig(enabled=True, console_level=logging.INFO)

config = wastesim.SimulationConfig(fleet_size=2, seed=2024)


# =============================================================================
# SINGLE RUN
# =============================================================================

result = wastesim.simulate(config)
print_report(result.report, result.stats.street_durations)

for truck in result.trucks:
    print(f"{truck.name}: {len(truck.visited)} streets, {truck.communal_kg:.1f} kg communal waste")


# =============================================================================
# REPLICATIONS
# =============================================================================

results = wastesim.run(config, number_runs=20)
frame = wastesim.replications_frame(results)

print(f"\n{'='*70}")
print("COST OVER 20 REPLICATIONS (CZK)")
print(f"{'='*70}\n")
print(frame["total"].describe())

result.stats.street_durations.plot()
plt.show()
