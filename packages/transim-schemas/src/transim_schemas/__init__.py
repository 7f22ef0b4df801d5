"""transim-schemas: Data contracts for the mock translation backend."""
