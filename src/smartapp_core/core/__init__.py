"""Core building blocks shared across smartapp-core features."""
