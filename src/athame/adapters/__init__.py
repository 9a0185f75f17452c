"""Adapters: everything that talks to the container engine or the network."""
