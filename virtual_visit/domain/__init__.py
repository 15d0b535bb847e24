"""Domain models and errors for virtual visit summaries."""
