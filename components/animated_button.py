from PyQt5 import QtCore, QtGui, QtWidgets
from constants import THEME

class AnimatedButton(QtWidgets.QPushButton):
    """Botón de grabación con efecto de opacidad al presionar y estilo según estado."""
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.setObjectName("PrimaryButton")
        self.setCursor(QtGui.QCursor(QtCore.Qt.PointingHandCursor))
        self.setFocusPolicy(QtCore.Qt.StrongFocus)
        self.setMinimumWidth(180)
        self.setMinimumHeight(THEME["sizes"]["btn_height"])
        self.setSizePolicy(QtWidgets.QSizePolicy.MinimumExpanding, QtWidgets.QSizePolicy.Fixed)

        # Opacidad
        self._opacity_effect = QtWidgets.QGraphicsOpacityEffect(self)
        self._opacity_effect.setOpacity(THEME["anim"]["opacity_rest"])
        self.setGraphicsEffect(self._opacity_effect)

        # Efecto "press": pequeño bounce con opacidad
        self._press_anim = QtCore.QPropertyAnimation(self._opacity_effect, b"opacity", self)
        self._press_anim.setDuration(THEME["anim"]["press_ms"])
        self._press_anim.setStartValue(THEME["anim"]["opacity_hover"])
        self._press_anim.setEndValue(THEME["anim"]["opacity_rest"])
        self._press_anim.setEasingCurve(QtCore.QEasingCurve.InOutQuad)

        self.pressed.connect(self._press_anim.start)

    def set_active(self, active: bool):
        """Rojo mientras se graba, azul en reposo."""
        self.setObjectName("DangerButton" if active else "PrimaryButton")
        # Re-aplicar QSS tras cambiar objectName
        self.style().unpolish(self)
        self.style().polish(self)
        self.update()
