"""Character build engine: store, rules and the presentation-facing builder."""
