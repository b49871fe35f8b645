import sys
import logging
from PyQt5 import QtCore, QtWidgets
from constants import THEME
from domain.recording_state import SensorUnavailableError
from screens.main_screen import MainWindow
from utils.pose_estimator import PoseEstimator
from utils.realsense_sensor import RealSenseSensor
from utils.tracking_session import TrackingSession
from config import DEBUG_MODE

logger = logging.getLogger(__name__)


def open_session() -> TrackingSession:
    """Open the depth sensor and build the tracking loop around it."""
    sensor = RealSenseSensor(pose_estimator=PoseEstimator())
    if not sensor.initialize():
        raise SensorUnavailableError("RealSense camera could not be initialized")
    return TrackingSession(sensor)


def main():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG_MODE else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # El sensor es obligatorio: sin él no se entra al bucle de seguimiento
    try:
        session = open_session()
    except SensorUnavailableError as e:
        logger.error(f"Depth sensor unavailable, exiting: {e}")
        sys.exit(1)

    # Alta-DPI para que todo se vea nítido
    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_EnableHighDpiScaling, True)
    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_UseHighDpiPixmaps, True)

    app = QtWidgets.QApplication(sys.argv)
    QtWidgets.QApplication.setStyle("Fusion")
    app.setStyleSheet(THEME["qss"]["base"])
    win = MainWindow(session)
    win.show()
    code = app.exec_()
    session.close()
    sys.exit(code or win.exit_code)


if __name__ == "__main__":
    main()
