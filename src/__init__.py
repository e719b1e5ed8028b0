"""KosmoKorn: a virtual pet planet that grows one day at a time."""
