import logging

from PyQt5.QtCore import Qt, QSize, pyqtSignal
from PyQt5.QtWidgets import (
    QWidget,
    QMainWindow,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QLineEdit,
    QRadioButton,
    QButtonGroup,
    QApplication,
    QGridLayout,
    QSizePolicy,
)

from .config import CalculatorConfig, INITIAL_WINDOW_SIZE, SPACING, WINDOW_TITLE
from .delay_times import NOTE_VALUES, RHYTHMIC_MODIFIERS, Unit
from .engine import CalculatorEngine
from .state import DOUBLE, HALVE, KEY_BINDINGS, TEXT_FIELD_KEYS

logger = logging.getLogger(__name__)


STYLESHEET = """
QMainWindow, QWidget {
    background-color: #282a36;
    color: #f8f8f2;
    font-family: "Segoe UI", "Arial", sans-serif;
    font-size: 11pt;
}

QPushButton {
    background-color: #bd93f9;
    border: none;
    border-radius: 6px;
    padding: 8px 16px;
    color: #282a36;
    font-weight: bold;
}
QPushButton:hover {
    background-color: #caa9fa;
}
QPushButton:pressed {
    background-color: #9580ff;
}
QPushButton:disabled {
    background-color: #44475a;
    color: #6272a4;
}

QLineEdit {
    background-color: #44475a;
    border: 1px solid #6272a4;
    border-radius: 4px;
    padding: 4px;
    color: #f8f8f2;
}

QRadioButton {
    spacing: 6px;
}

QLabel {
    color: #f8f8f2;
}
"""

# Reset is highlighted while a tap session is running
RESET_ACTIVE_STYLE = "background-color: #50fa7b;"

# Qt keys that are not plain characters
_NAMED_KEYS = {
    Qt.Key_Up: "up",
    Qt.Key_Down: "down",
    Qt.Key_Right: "right",
    Qt.Key_Left: "left",
    Qt.Key_Space: "space",
}


def key_name(key: int, text: str):
    """Name used in KEY_BINDINGS for a Qt key event, or None."""
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    text = text.lower()
    return text if text in KEY_BINDINGS else None


class DelayTable(QWidget):
    """Unit toggles, note labels and one copy button per delay time."""
    unitSelected = pyqtSignal(object)  # Unit
    valueClicked = pyqtSignal(float)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QGridLayout(self)
        self.layout.setSpacing(SPACING)

        # Unit toggles in the corner cell
        toggles = QHBoxLayout()
        self.unit_group = QButtonGroup(self)
        self.unit_buttons = {}
        for unit in Unit:
            rb = QRadioButton(str(unit))
            rb.setFocusPolicy(Qt.NoFocus)
            rb.toggled.connect(lambda checked, u=unit: self._on_unit_toggled(u, checked))
            self.unit_group.addButton(rb)
            toggles.addWidget(rb)
            self.unit_buttons[unit] = rb
        toggles.addStretch(1)
        self.layout.addLayout(toggles, 0, 0)

        for col, modifier in enumerate(RHYTHMIC_MODIFIERS, start=1):
            self.layout.addWidget(QLabel(str(modifier)), 0, col)

        self.buttons = {}
        self._values = {}
        for row, note in enumerate(NOTE_VALUES, start=1):
            self.layout.addWidget(QLabel(f"{note}:"), row, 0)
            for col, modifier in enumerate(RHYTHMIC_MODIFIERS, start=1):
                btn = QPushButton()
                btn.setFocusPolicy(Qt.NoFocus)
                btn.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
                btn.clicked.connect(lambda _checked=False, k=(modifier, note): self._on_clicked(k))
                self.layout.addWidget(btn, row, col)
                self.buttons[(modifier, note)] = btn

        for col in range(len(RHYTHMIC_MODIFIERS) + 1):
            self.layout.setColumnStretch(col, 1)

    def set_unit(self, unit: Unit):
        rb = self.unit_buttons[unit]
        rb.blockSignals(True)
        rb.setChecked(True)
        rb.blockSignals(False)

    def set_cells(self, cells: dict):
        for key, (text, value) in cells.items():
            btn = self.buttons[key]
            btn.setText(text)
            btn.setEnabled(value is not None)
            self._values[key] = value

    def _on_unit_toggled(self, unit: Unit, checked: bool):
        if checked:
            self.unitSelected.emit(unit)

    def _on_clicked(self, key):
        value = self._values.get(key)
        if value is not None:
            self.valueClicked.emit(value)


class MainWindow(QMainWindow):
    def __init__(self, config: CalculatorConfig = None):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setStyleSheet(STYLESHEET)
        self.setMinimumSize(QSize(*INITIAL_WINDOW_SIZE))
        self.resize(QSize(*INITIAL_WINDOW_SIZE))

        self.engine = CalculatorEngine(config, parent=self)

        # UI
        root = QWidget()
        root.setFocusPolicy(Qt.StrongFocus)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(SPACING, SPACING, SPACING, SPACING)
        layout.setSpacing(SPACING)

        # Tempo controls
        controls_row = QHBoxLayout()
        controls_row.setSpacing(SPACING)
        self.btn_tap = QPushButton("Tap")
        self.btn_reset = QPushButton("Reset")
        self.tempo_edit = QLineEdit(self.engine.tempo_text)
        self.btn_halve = QPushButton("Halve")
        self.btn_double = QPushButton("Double")
        for btn in (self.btn_tap, self.btn_reset, self.btn_halve, self.btn_double):
            btn.setFocusPolicy(Qt.NoFocus)
        controls_row.addWidget(self.btn_tap)
        controls_row.addWidget(self.btn_reset)
        controls_row.addWidget(self.tempo_edit, 1)
        controls_row.addWidget(self.btn_halve)
        controls_row.addWidget(self.btn_double)
        layout.addLayout(controls_row)

        self.table = DelayTable()
        layout.addWidget(self.table, 1)

        # Footer info
        self.info = QLabel("Ready")
        f = self.info.font()
        f.setPointSize(9)
        self.info.setFont(f)
        layout.addWidget(self.info)

        self.setCentralWidget(root)
        self._root = root

        # Connections
        # -- Control (UI -> Engine) --
        self.btn_tap.clicked.connect(self.engine.tap)
        self.btn_reset.clicked.connect(self.engine.reset)
        self.btn_halve.clicked.connect(lambda: self.engine.scale_tempo(HALVE.factor))
        self.btn_double.clicked.connect(lambda: self.engine.scale_tempo(DOUBLE.factor))
        self.tempo_edit.textEdited.connect(self.engine.set_tempo_text)
        self.tempo_edit.editingFinished.connect(self.engine.submit_tempo)
        self.tempo_edit.returnPressed.connect(self._leave_tempo_edit)
        self.table.unitSelected.connect(self.engine.set_unit)
        self.table.valueClicked.connect(self.engine.copy_value)

        # -- Feedback (Engine -> UI) --
        self.engine.tempoTextChanged.connect(self._on_tempo_text_changed)
        self.engine.unitChanged.connect(self.table.set_unit)
        self.engine.tapCountChanged.connect(self._on_tap_count_changed)
        self.engine.tableChanged.connect(self.table.set_cells)
        self.engine.copyRequested.connect(self._copy_to_clipboard)

        self.table.set_unit(self.engine.unit)
        self.table.set_cells(self.engine.cells())
        self._on_tap_count_changed(self.engine.tap_count())
        root.setFocus()

    # Slots / handlers
    def _on_tempo_text_changed(self, text: str):
        if self.tempo_edit.text() != text:
            self.tempo_edit.setText(text)

    def _on_tap_count_changed(self, count: int):
        self.btn_reset.setStyleSheet(RESET_ACTIVE_STYLE if count > 0 else "")
        if count > 1:
            self.info.setText(f"{count} taps")
        elif count == 1:
            self.info.setText("Keep tapping")
        else:
            self.info.setText("Ready")

    def _leave_tempo_edit(self):
        self._root.setFocus()

    def _copy_to_clipboard(self, text: str):
        clipboard = QApplication.clipboard()
        if clipboard is None:
            logger.warning("Clipboard unavailable, cannot copy %s", text)
            return
        clipboard.setText(text)
        self.info.setText(f"Copied {text}")

    def keyPressEvent(self, e):
        name = key_name(e.key(), e.text())
        if name is None or e.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            if e.key() == Qt.Key_Escape:
                self._leave_tempo_edit()
                return
            super().keyPressEvent(e)
            return
        if self.tempo_edit.hasFocus() and name not in TEXT_FIELD_KEYS:
            super().keyPressEvent(e)
            return
        self.engine.dispatch(KEY_BINDINGS[name])

