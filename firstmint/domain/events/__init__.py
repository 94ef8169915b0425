"""Domain Event definitions.

Represents significant occurrences during a fetch (deferral, retry,
success, failure) that other parts of the system might react to.
"""
