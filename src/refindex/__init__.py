"""refindex - keyword lookup over markdown reference documents."""

__version__ = "0.1.0"
