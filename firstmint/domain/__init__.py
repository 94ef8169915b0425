"""Domain Layer: value objects, events and interfaces (ports).

Has no dependency on the infrastructure layer.
"""
