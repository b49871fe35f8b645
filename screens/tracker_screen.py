from PyQt5 import QtCore, QtGui, QtWidgets
import numpy as np
import cv2
import logging
from components.animated_button import AnimatedButton
from domain.recording_state import RecordingState
from utils.control_events import ControlEvents
from utils.preview_renderer import render_preview
from utils.tracking_session import TickResult
from constants import THEME
from config import PREVIEW_ENABLED

logger = logging.getLogger(__name__)

RECORD_TEXT = "Clic para grabar"
STOP_TEXT = "Detener"


def to_qimage(image: np.ndarray) -> QtGui.QImage:
    """Convierte una imagen BGR o máscara (uint8) a QImage."""
    if image.ndim == 2:
        h, w = image.shape
        return QtGui.QImage(image.data, w, h, w, QtGui.QImage.Format_Grayscale8).copy()
    rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    h, w, ch = rgb.shape
    return QtGui.QImage(rgb.data, w, h, ch * w, QtGui.QImage.Format_RGB888).copy()


class TrackerScreen(QtWidgets.QWidget):
    """Vista previa del marcador y el brazo, con el botón de grabación."""
    def __init__(self, controls: ControlEvents, parent=None):
        super().__init__(parent)
        self.controls = controls

        card = QtWidgets.QFrame(objectName="Card")
        card_vertical_layout = QtWidgets.QVBoxLayout(card)
        card_vertical_layout.setContentsMargins(24, 24, 24, 24)
        card_vertical_layout.setSpacing(16)

        title = QtWidgets.QLabel("Seguimiento de marcador", objectName="H1")
        subtitle = QtWidgets.QLabel(
            "Comprueba que la máscara captura el marcador y presiona grabar.\n"
            "La vista previa se congela durante la grabación.",
            objectName="Muted",
        )

        # Vista previa (color) y máscara umbralizada
        self.preview = QtWidgets.QLabel("Sin vista previa", objectName="Preview")
        self.preview.setFixedSize(THEME["sizes"]["preview_w"], THEME["sizes"]["preview_h"])
        self.preview.setAlignment(QtCore.Qt.AlignCenter)

        self.mask_preview = QtWidgets.QLabel("Sin máscara", objectName="Preview")
        self.mask_preview.setFixedSize(THEME["sizes"]["mask_w"], THEME["sizes"]["mask_h"])
        self.mask_preview.setAlignment(QtCore.Qt.AlignCenter)

        previews = QtWidgets.QHBoxLayout()
        previews.setSpacing(16)
        previews.addWidget(self.preview)
        previews.addWidget(self.mask_preview, 0, QtCore.Qt.AlignTop)

        self.record_button = AnimatedButton(RECORD_TEXT)
        self.record_button.clicked.connect(self.controls.request_toggle)

        self.status = QtWidgets.QLabel("", objectName="Muted")

        self.feedback = QtWidgets.QLabel("")
        self.feedback.setObjectName("Success")
        self.feedback.setVisible(False)

        card_vertical_layout.addWidget(title)
        card_vertical_layout.addWidget(subtitle)
        card_vertical_layout.addLayout(previews)
        card_vertical_layout.addWidget(self.record_button, 0, QtCore.Qt.AlignLeft)
        card_vertical_layout.addWidget(self.status)
        card_vertical_layout.addWidget(self.feedback)

        root = QtWidgets.QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.addWidget(card, 0, QtCore.Qt.AlignHCenter)
        root.addStretch(1)

        self._state = RecordingState.IDLE

    def show_tick(self, result: TickResult):
        """Actualiza botón, estado y (si no se graba) la vista previa."""
        self.set_state(result.state)

        if result.frames_flushed is not None:
            self._show_success(f"✔ {result.frames_flushed} frames guardados")

        marker_text = f"marcador {result.marker.pixel}" if result.marker.found else "sin marcador"
        body_text = "cuerpo detectado" if result.joints.body_present else "sin cuerpo"
        self.status.setText(f"{self._state} · {marker_text} · {body_text}")

        if result.state is RecordingState.RECORDING or not PREVIEW_ENABLED:
            return

        preview = render_preview(
            result.small_image,
            result.frame.skeleton,
            result.marker.pixel if result.marker.found else None,
        )
        self._set_image(self.preview, preview)
        if result.marker.mask is not None:
            self._set_image(self.mask_preview, result.marker.mask)

    def set_state(self, state: RecordingState):
        if state is self._state:
            return
        self._state = state
        recording = state is RecordingState.RECORDING
        self.record_button.setText(STOP_TEXT if recording else RECORD_TEXT)
        self.record_button.set_active(recording)
        if recording:
            self.feedback.setVisible(False)
        logger.debug(f"Recording state: {state}")

    def show_error(self, text: str):
        self.feedback.setObjectName("Error")
        self._repolish(self.feedback)
        self.feedback.setText(text)
        self.feedback.setVisible(True)
        self.record_button.setDisabled(True)

    def _show_success(self, text: str):
        self.feedback.setObjectName("Success")
        self._repolish(self.feedback)
        self.feedback.setText(text)
        self.feedback.setVisible(True)

    @staticmethod
    def _repolish(widget: QtWidgets.QWidget):
        widget.style().unpolish(widget)
        widget.style().polish(widget)

    def _set_image(self, label: QtWidgets.QLabel, image: np.ndarray):
        pm = QtGui.QPixmap.fromImage(to_qimage(image))
        scaled = pm.scaled(label.size(), QtCore.Qt.KeepAspectRatio, QtCore.Qt.FastTransformation)
        label.setPixmap(scaled)
