"""
Qt item model over one section of the day grid.

Lets any QTableView-style widget show a month (6x7) or the week strip
(1x7) straight from a CalendarController. The model only reports data; it
does no painting.
"""

from typing import Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from backend.calendar_controller import CalendarController
from backend.config import ViewType
from backend.date_range import DAYS_PER_WEEK
from backend.grid_cache import GridIndex, MONTH_ROWS
from backend.grid_provider import CellState


DayCellRole = Qt.UserRole + 1    # the DayCell for the slot
CellStateRole = Qt.UserRole + 2  # CellState value string
DateRole = Qt.UserRole + 3       # datetime.date or None


class DayGridModel(QAbstractTableModel):
    """Table model exposing one grid section of a CalendarController."""

    def __init__(self, controller: CalendarController, section: int = 0, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._section = section

    @property
    def section(self) -> int:
        return self._section

    def set_section(self, section: int):
        self.beginResetModel()
        self._section = section
        self.endResetModel()

    def refresh(self):
        """Re-read everything, e.g. after a reload, selection or view change."""
        self.beginResetModel()
        self.endResetModel()

    # ==================== Index mapping ====================

    def grid_index(self, index: QModelIndex) -> Optional[GridIndex]:
        """Grid position behind a model index, honouring right-to-left layout."""
        if not index.isValid():
            return None
        item = index.row() * DAYS_PER_WEEK + self._controller.visual_column(index.column())
        return GridIndex(section=self._section, item=item)

    def model_index(self, grid_index: GridIndex) -> QModelIndex:
        if grid_index.section != self._section:
            return QModelIndex()
        row, column = divmod(grid_index.item, DAYS_PER_WEEK)
        if row >= self.rowCount():
            return QModelIndex()
        return self.index(row, self._controller.visual_column(column))

    # ==================== QAbstractTableModel ====================

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid() or self._section >= self._controller.provider.section_count():
            return 0
        return 1 if self._controller.view_type == ViewType.WEEK else MONTH_ROWS

    def columnCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return DAYS_PER_WEEK

    def data(self, index, role=Qt.DisplayRole):
        grid_index = self.grid_index(index)
        if grid_index is None:
            return None
        cell = self._controller.cell(grid_index)

        if role == Qt.DisplayRole:
            return str(cell.day_number) if cell.day_number is not None else None
        if role == DayCellRole:
            return cell
        if role == CellStateRole:
            return cell.state.value
        if role == DateRole:
            return cell.day.date if cell.day is not None else None
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        if not 0 <= section < DAYS_PER_WEEK:
            return None
        return self._controller.weekday_headers()[self._controller.visual_column(section)]

    def flags(self, index):
        grid_index = self.grid_index(index)
        if grid_index is None:
            return Qt.NoItemFlags
        state = self._controller.cell(grid_index).state
        if state == CellState.PADDING:
            return Qt.NoItemFlags
        if state == CellState.OUT_OF_RANGE:
            return Qt.ItemIsEnabled
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable
