# src/jalali_range_picker/ui/widgets/range_input_fields.py
from PyQt6.QtWidgets import QWidget, QLineEdit, QHBoxLayout, QVBoxLayout, QLabel
from PyQt6.QtCore import Qt

from ...services.range_selection import RangeTextInput
from ...services.range_validation import FormatError, InvalidDateError, InvalidRangeError


class RangeInputFields(QWidget):
    """Start and end text fields bound to a RangeTextInput.

    Text is pushed into the model on every edit. Inline errors appear only
    once the model reports them (after a rejected confirm).
    """

    def __init__(self, text_input: RangeTextInput, labels: dict, parent=None):
        super().__init__(parent)
        self.text_input = text_input
        self.labels = labels

        h = QHBoxLayout(self)
        h.setContentsMargins(0, 0, 0, 0)
        h.setSpacing(12)

        self.start_line, self.start_error = self._build_field(
            h, labels["field_start_label_text"], labels["field_start_hint_text"], text_input.start_text)
        self.end_line, self.end_error = self._build_field(
            h, labels["field_end_label_text"], labels["field_end_hint_text"], text_input.end_text)

        # connections
        self.start_line.textChanged.connect(self._on_start_changed)
        self.end_line.textChanged.connect(self._on_end_changed)
        self.refresh_errors()

    def _build_field(self, parent_layout, label_text, hint_text, initial_text):
        column = QVBoxLayout()
        column.setSpacing(4)
        label = QLabel(label_text)
        line = QLineEdit()
        line.setPlaceholderText(hint_text)
        line.setClearButtonEnabled(True)
        line.setText(initial_text)
        error = QLabel("")
        error.setStyleSheet("color: #b71c1c;")
        error.setAlignment(Qt.AlignmentFlag.AlignLeading)
        error.setVisible(False)
        column.addWidget(label)
        column.addWidget(line)
        column.addWidget(error)
        parent_layout.addLayout(column)
        return line, error

    def _on_start_changed(self, text):
        self.text_input.set_start_text(text)
        self.refresh_errors()

    def _on_end_changed(self, text):
        self.text_input.set_end_text(text)
        self.refresh_errors()

    def _message_for(self, error) -> str:
        if isinstance(error, FormatError):
            return self.labels["error_format_text"]
        if isinstance(error, InvalidDateError):
            return self.labels["error_invalid_text"]
        if isinstance(error, InvalidRangeError):
            return self.labels["error_invalid_range_text"]
        return str(error)

    def refresh_errors(self):
        for field, label in (("start", self.start_error), ("end", self.end_error)):
            error = self.text_input.visible_error(field)
            label.setText(self._message_for(error) if error else "")
            label.setVisible(error is not None)

    def focus_start(self):
        self.start_line.setFocus()
