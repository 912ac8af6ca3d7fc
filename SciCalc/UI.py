# UI.py
"""""PySide6 user interface for the scientific calculator.

Structure
---------
- Calculator UI: main window with history line, display and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Collect the expression from buttons and keyboard
- Hand the expression to MathEngine.calculate together with the angle mode
- Show the result (or the error sentinel) in the display
- Clipboard integration and optional auto-evaluate after paste

Responsibilities (Settings)
---------------------------
- Load Current Settings and Settings Descriptions via config_manager
- Save and apply theme and angle mode changes immediately

The engine is synchronous and fast, so it is called directly on the UI thread.
"""""

import logging
import sys

import pyperclip
from PySide6 import QtWidgets
from PySide6.QtCore import Qt, Signal

from . import config_manager
from . import error as E
from . import MathEngine
from .Evaluator import EvaluationContext
from .Operators import EvaluationMode

logger = logging.getLogger(__name__)

SENTINELS = {kind.value for kind in E.ErrorKind}
INVALID_INPUT = "Ungültige Eingabe"

# Longest input that is accepted from the clipboard
MAX_PASTE_LENGTH = 17

OPERATOR_BUTTONS = ("+", "-", "×", "÷", "^")

# (text, row, column)
BUTTONS = [
    ("Deg", 0, 0), ("sin(", 0, 1), ("cos(", 0, 2), ("tan(", 0, 3), ("ln(", 0, 4), ("log(", 0, 5),
    ("2nd", 1, 0), ("sinh(", 1, 1), ("cosh(", 1, 2), ("tanh(", 1, 3), ("log₂(", 1, 4), ("!", 1, 5),
    ("π", 2, 0), ("е", 2, 1), ("√", 2, 2), ("³√", 2, 3), ("(", 2, 4), (")", 2, 5),
    ("½", 3, 0), ("7", 3, 1), ("8", 3, 2), ("9", 3, 3), ("÷", 3, 4), ("⌫", 3, 5),
    ("⅓", 4, 0), ("4", 4, 1), ("5", 4, 2), ("6", 4, 3), ("×", 4, 4), ("CE", 4, 5),
    ("¼", 5, 0), ("1", 5, 1), ("2", 5, 2), ("3", 5, 3), ("-", 5, 4), ("C", 5, 5),
    ("⚙", 6, 0), ("^", 6, 1), ("0", 6, 2), (",", 6, 3), ("+", 6, 4), ("=", 6, 5),
]

# "2nd" swaps these buttons to their inverse function
INVERSE_LABELS = {
    "sin(": "sin⁻¹(", "cos(": "cos⁻¹(", "tan(": "tan⁻¹(",
    "sinh(": "sinh⁻¹(", "cosh(": "cosh⁻¹(", "tanh(": "tanh⁻¹(",
}

KEY_TEXT = {
    Qt.Key.Key_Asterisk: "×",
    Qt.Key.Key_Slash: "÷",
}


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Boolean settings become checkboxes, the angle mode a
    combo box. Changes are saved through config_manager when OK is pressed.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(300, 200)
        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            elif key_value == "angle_mode":
                row_h_layout = QtWidgets.QHBoxLayout()
                combo = QtWidgets.QComboBox()
                combo.addItems([mode.value for mode in EvaluationMode])
                combo.setCurrentText(value)
                row_h_layout.addWidget(QtWidgets.QLabel(description))
                row_h_layout.addWidget(combo)
                main_layout.addLayout(row_h_layout)
                self.widgets[key_value] = combo

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)
        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        apply_darkmode(self, self.setting_value_list.get("darkmode", False))

    def save_settings(self):
        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                self.setting_value_list[key_value] = widget.isChecked()
            elif isinstance(widget, QtWidgets.QComboBox):
                self.setting_value_list[key_value] = widget.currentText()

        if config_manager.save_setting(self.setting_value_list) != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error", "Settings could not be saved.")


def apply_darkmode(widget, enabled):
    if enabled:
        widget.setStyleSheet("""
            QWidget {background-color: #121212; color: white;}
            QPushButton {background-color: #2e2e2e; font-weight: bold;}
            QLineEdit {background-color: #121212; color: white; border: none;}""")
    else:
        widget.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.mode = config_manager.load_evaluation_mode()

        # --- 2. Instance State ---
        self.history_text = ""    # Expression built so far (upper line)
        self.remove_value = False  # Next digit replaces the display
        self.last_operator = ""   # For repeated '='
        self.last_number = ""
        self.inverse = False
        self.button_objects = {}

        # --- 3. Window Setup ---
        self.setWindowTitle("Calculator")
        self.setMinimumSize(420, 540)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        self.history = QtWidgets.QLabel("")
        self.history.setAlignment(Qt.AlignmentFlag.AlignRight)
        main_v_layout.addWidget(self.history)

        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(32)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display)

        # --- 4. Button Grid ---
        button_grid = QtWidgets.QGridLayout()
        button_grid.setSpacing(2)
        main_v_layout.addLayout(button_grid, 1)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )
        for text, row, col in BUTTONS:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(lambda checked=False, original=text: self.handle_button_press(original))
            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.button_objects["="].setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
        self.update_mode_button()
        apply_darkmode(self, self.setting_value_list.get("darkmode", False))

    # --- Display helpers ---
    def display_text(self):
        return self.display.text()

    def set_display(self, text):
        self.display.setText(text)

    def display_is_error(self):
        return self.display_text() in SENTINELS or self.display_text() == INVALID_INPUT

    # --- Button dispatch ---
    def handle_button_press(self, value):
        if value in INVERSE_LABELS and self.inverse:
            value = INVERSE_LABELS[value]

        if value == "⚙":
            self.open_settings()
        elif value == "Deg":
            self.toggle_mode()
        elif value == "2nd":
            self.inverse = not self.inverse
            for label, inverse_label in INVERSE_LABELS.items():
                self.button_objects[label].setText(inverse_label if self.inverse else label)
        elif value == "=":
            self.calculate()
        elif value == "C":
            self.history_text = ""
            self.history.setText("")
            self.set_display("0")
        elif value == "CE":
            self.set_display("0")
        elif value == "⌫":
            self.backspace()
        elif value == ",":
            if "," not in self.display_text():
                self.set_display(self.display_text() + ",")
        elif value in OPERATOR_BUTTONS:
            self.add_operator(value)
        else:
            self.add_input(value)

    def add_input(self, value):
        if self.remove_value or self.display_is_error() or self.display_text() == "0":
            self.set_display(value)
        else:
            self.set_display(self.display_text() + value)
        self.remove_value = False
        self.last_number = self.display_text()

    def add_operator(self, operator):
        self.last_operator = operator
        if "=" in self.history_text:
            self.history_text = ""
        self.history_text += f"{self.display_text()} {operator} "
        self.history.setText(self.history_text)
        self.remove_value = True

    def backspace(self):
        text = self.display_text()
        if self.display_is_error() or len(text) <= 1:
            self.set_display("0")
        else:
            text = text[:-1]
            self.set_display(text + "0" if text == "-" else text)

    def calculate(self):
        if "=" in self.history_text:
            # Repeated '=': apply the last operation again to the result
            expression = f"{self.display_text()} {self.last_operator} {self.last_number}"
        else:
            expression = self.history_text + self.display_text()

        result = MathEngine.calculate(expression, EvaluationContext(self.mode))
        logger.info("%s = %s", expression, result)

        self.history_text = expression + " ="
        self.history.setText(self.history_text)
        self.set_display(result)
        self.remove_value = True

    # --- Mode ---
    def toggle_mode(self):
        if self.mode == EvaluationMode.DEGREES:
            self.mode = EvaluationMode.RADIANS
        else:
            self.mode = EvaluationMode.DEGREES
        config_manager.save_evaluation_mode(self.mode)
        self.update_mode_button()

    def update_mode_button(self):
        self.button_objects["Deg"].setText(self.mode.value)

    # --- Clipboard ---
    def copy_to_clipboard(self):
        pyperclip.copy(self.display_text())

    def paste_from_clipboard(self):
        data = QtWidgets.QApplication.clipboard().text().strip()
        if not data:
            return

        # The pasted text has to survive the engine on its own before it is accepted
        if len(data) > MAX_PASTE_LENGTH or MathEngine.calculate("1+" + data) in SENTINELS:
            self.set_display(INVALID_INPUT)
            return

        if any(operator in data for operator in ("+", "*", "/", "×", "÷")) or "-" in data[1:]:
            self.history_text += data
            self.history.setText(self.history_text)
            self.set_display("0")
        else:
            self.add_input(data)

        if self.setting_value_list.get("after_paste_enter", False):
            self.calculate()

    # --- Keyboard ---
    def keyPressEvent(self, event):
        modifiers = event.modifiers()
        key = event.key()

        if modifiers & Qt.KeyboardModifier.ControlModifier and key == Qt.Key.Key_C:
            self.copy_to_clipboard()
        elif modifiers & Qt.KeyboardModifier.ControlModifier and key == Qt.Key.Key_V:
            self.paste_from_clipboard()
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press("=")
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press("⌫")
        elif key == Qt.Key.Key_Escape:
            self.handle_button_press("C")
        elif key == Qt.Key.Key_Delete:
            self.handle_button_press("CE")
        elif key in KEY_TEXT:
            self.handle_button_press(KEY_TEXT[key])
        elif event.text() and (event.text().isdigit() or event.text() in "+-^!(),."):
            self.handle_button_press("," if event.text() == "." else event.text())
        else:
            super().keyPressEvent(event)

    # --- Settings ---
    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.settings_saved.connect(self.apply_settings)
        settings_dialog.exec()

    def apply_settings(self):
        # Reload after the dialog has written config.json
        self.setting_value_list = config_manager.load_setting_value("all")
        self.mode = config_manager.load_evaluation_mode()
        self.update_mode_button()
        apply_darkmode(self, self.setting_value_list.get("darkmode", False))


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())
