"""Application layer: services orchestrating domain and boundary components."""
