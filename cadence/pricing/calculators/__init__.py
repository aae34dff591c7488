# Ensure registration happens by importing modules
from .base import calculator_registry, get_calculator, register  # noqa
from . import (  # noqa
    turnkey,
    rate_based,
    production,
    flat_rate,
)
