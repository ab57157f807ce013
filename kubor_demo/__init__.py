"""Demo HTTP service for validating readiness probes and shutdown handling."""
