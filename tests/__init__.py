"""tspectrum test suite."""
