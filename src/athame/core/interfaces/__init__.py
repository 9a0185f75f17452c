"""Core contracts (Protocol).

Concrete adapters (tools, notifiers, deploy targets) implement these so that
pipelines depend on abstractions and can be tested with fakes.
"""
