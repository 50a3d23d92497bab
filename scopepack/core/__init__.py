"""Core build model: scope graph, classpath derivation, publication."""
