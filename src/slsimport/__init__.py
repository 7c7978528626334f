"""slsimport: import and deep-merge configuration fragments into a root document."""

from slsimport.services.importer import ConfigImporter
from slsimport.services.result import ActivationResult

__version__ = "0.4.0"

__all__ = ["ActivationResult", "ConfigImporter", "__version__"]
