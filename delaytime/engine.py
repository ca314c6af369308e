import logging

from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot

from .config import CalculatorConfig
from .delay_times import Unit
from .state import (
    CalculatorState,
    CopyValue,
    EditTempoText,
    Reset,
    Scale,
    SelectUnit,
    SubmitTempo,
    Tap,
    table_cells,
    update,
)

logger = logging.getLogger(__name__)


class CalculatorEngine(QObject):
    tempoTextChanged = pyqtSignal(str)
    unitChanged = pyqtSignal(object)  # Unit
    tapCountChanged = pyqtSignal(int)
    tableChanged = pyqtSignal(object)  # {(modifier, note): (text, value or None)}
    copyRequested = pyqtSignal(str)

    def __init__(self, config: CalculatorConfig = None, parent=None):
        super().__init__(parent)
        self._state = CalculatorState.from_config(config or CalculatorConfig())

    # Properties
    @property
    def tempo_text(self) -> str:
        return self._state.tempo_text

    @property
    def unit(self) -> Unit:
        return self._state.unit

    def tempo(self):
        return self._state.tempo()

    def tap_count(self) -> int:
        return self._state.tap_tempo.tap_count()

    def cells(self) -> dict:
        return table_cells(self._state)

    def dispatch(self, intent):
        """Apply an intent and emit a signal for everything it changed."""
        before = (self._state.tempo_text, self._state.unit, self.tap_count())
        payload = update(self._state, intent)
        tempo_text, unit, count = self._state.tempo_text, self._state.unit, self.tap_count()

        if tempo_text != before[0]:
            self.tempoTextChanged.emit(tempo_text)
        if unit != before[1]:
            logger.info("Unit: %s", unit)
            self.unitChanged.emit(unit)
        if count != before[2]:
            self.tapCountChanged.emit(count)
        if tempo_text != before[0] or unit != before[1]:
            self.tableChanged.emit(self.cells())
        if payload is not None:
            self.copyRequested.emit(payload)

    @pyqtSlot()
    def tap(self):
        self.dispatch(Tap())
        logger.debug("Tap %d -> %s", self.tap_count(), self._state.tempo_text)

    @pyqtSlot()
    def reset(self):
        self.dispatch(Reset())

    @pyqtSlot(str)
    def set_tempo_text(self, text: str):
        self.dispatch(EditTempoText(text))

    @pyqtSlot()
    def submit_tempo(self):
        self.dispatch(SubmitTempo())

    @pyqtSlot(float)
    def scale_tempo(self, factor: float):
        self.dispatch(Scale(factor))

    @pyqtSlot(object)
    def set_unit(self, unit: Unit):
        self.dispatch(SelectUnit(unit))

    @pyqtSlot(float)
    def copy_value(self, value: float):
        self.dispatch(CopyValue(value))
