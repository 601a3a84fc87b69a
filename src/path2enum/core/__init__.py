"""Scanner, synthesizer, builder and runner."""
