"""
Budget Allocation
=================

Responsibility:
- Named training budgets injected as fit-time arguments.
- Geometric, constant and Hyperband allocation schedules for successive halving.
"""

from .budget_allocation import Budget, AllocationMode, allocate, floor_log, halving_rounds

__all__ = ['Budget', 'AllocationMode', 'allocate', 'floor_log', 'halving_rounds']
