"""taskgraph - Task dependency and critical path analysis.

Detects circular dependencies, computes Critical Path Method schedules
and walks downstream impact over project task graphs.
"""

__version__ = "0.1.0"
