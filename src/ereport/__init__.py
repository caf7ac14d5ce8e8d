"""e-Report resilience layer.

Error classification and resilient execution for the e-Report web client:
turns heterogeneous transport failures into a typed error model and runs
backend calls with bounded retry, recovery actions and observability.
"""

__version__ = "0.3.0"
