"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (the Zora GraphQL API,
configuration sources, the console) and holds the resilience services.
"""
