# repairs/models/__init__.py

from .repair import Repair
from .repair_part import RepairPart

__all__ = ["Repair", "RepairPart"]
