"""Desktop simulator: pygame window, input adapter and mock sinks."""
