"""initres: percentile-based initial resource estimates from historical container usage."""

__version__ = "0.1.0"
