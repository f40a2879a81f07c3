"""Golden root documents, loaded with importlib.resources."""
