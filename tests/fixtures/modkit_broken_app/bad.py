raise ImportError("missing optional dependency")
