"""Schedule-aware bundle routing primitives: bundles, nodes, contacts, resource
managers, distances, a multigraph and contact plan readers."""

__version__ = "0.1.0"