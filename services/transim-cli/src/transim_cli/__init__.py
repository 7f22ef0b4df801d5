"""transim-cli: Command line interface for the mock translation backend."""
