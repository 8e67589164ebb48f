"""Feature modules for smartapp-core."""
