"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that infrastructure components
and outer layers rely on. Core application logic depends on these
interfaces, not concrete implementations.
"""
