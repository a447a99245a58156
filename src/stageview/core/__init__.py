"""Core subsystem: snapshot graph, summary derivation, configuration, logging."""
