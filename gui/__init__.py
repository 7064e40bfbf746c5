"""
Day Grid Calendar GUI Module

PySide6 adapters that expose the calendar controller to Qt item views and
Qt signal/slot connections.
"""

from .grid_model import DayGridModel, DayCellRole, CellStateRole, DateRole
from .delegate_bridge import QtCalendarDelegate

__all__ = ['DayGridModel', 'DayCellRole', 'CellStateRole', 'DateRole', 'QtCalendarDelegate']
