from PyQt5 import QtCore, QtGui, QtWidgets
import cv2
import logging
from constants import APP, THEME
from screens.tracker_screen import TrackerScreen
from utils.tracking_session import TrackingSession
from config import TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """Ejecuta el bucle de seguimiento (un tick por timeout) y muestra la pantalla."""
    def __init__(self, session: TrackingSession, tick_interval_ms: int = TICK_INTERVAL_MS):
        super().__init__()
        self.setWindowTitle(APP["TITLE"])
        self.resize(APP["WIDTH"], APP["HEIGHT"])
        self.setMinimumSize(720, 480)

        self.session = session
        self.exit_code = 0

        self.tracker = TrackerScreen(session.controls)
        self.setCentralWidget(self.tracker)

        # Ajustes de estilo global
        self.setStyleSheet(THEME["qss"]["base"])

        # Mismo hilo que la UI: el botón solo encola, el tick aplica
        self.timer = QtCore.QTimer(self)
        self.timer.timeout.connect(self._tick)
        self.timer.start(tick_interval_ms)

    def _tick(self):
        try:
            result = self.session.tick()
        except cv2.error:
            logger.exception("Fatal image processing error")
            self._abort("Error de procesamiento de imagen. Ver registro.")
            return

        if result is not None:
            self.tracker.show_tick(result)
        else:
            self.tracker.set_state(self.session.state)

    def _abort(self, message: str):
        self.timer.stop()
        self.exit_code = 1
        self.tracker.show_error(message)
        QtCore.QTimer.singleShot(0, lambda: QtWidgets.QApplication.instance().exit(1))

    def closeEvent(self, e: QtGui.QCloseEvent):
        self.timer.stop()
        self.session.close()
        return super().closeEvent(e)
