"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved (today a JSON file).
Services depend on plain records, never on the file itself.
"""

from .json_storage import EmployeeFileStorage

__all__ = ["EmployeeFileStorage"]
