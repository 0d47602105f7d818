"""
Shared Kernel

Framework-free building blocks reused by the domain packages, most
importantly the DateRange value object that holds a stay's dates.
"""
