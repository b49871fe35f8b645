from PyQt5 import QtCore

APP = {
    "TITLE": "Marker Tracker",
    "WIDTH": 1100,
    "HEIGHT": 720,
    "WINDOW_ROUND_RADIUS": 12,
}

THEME = {
    "colors": {
        "bg": "#0f172a",              # azul muy oscuro (slate-900)
        "bg_card": "#111827",         # gris/azul oscuro
        "primary": "#2563eb",         # azul principal
        "primary_hover": "#1d4ed8",
        "primary_pressed": "#1e40af",
        "text": "#e5e7eb",            # claro
        "text_muted": "#9ca3af",      # gris medio
        "preview_bg": "#000000",
        "preview_border": "#273449",
        "danger": "#ef4444",
        "danger_hover": "#dc2626",
        "success": "#10b981",
    },
    "sizes": {
        "font_base": 14,
        "font_h1": 26,
        "font_button": 16,
        "radius_sm": 8,
        "radius_md": 12,
        "btn_height": 46,
        "preview_w": 640,
        "preview_h": 360,
        "mask_w": 320,
        "mask_h": 180,
    },
    "anim": {
        "press_ms": 120,
        "ease": QtCore.QEasingCurve.OutCubic,
        "opacity_hover": 1.0,
        "opacity_rest": 0.94,
    },
    "fonts": {
        "family": "Inter, Segoe UI, Helvetica, Arial",
    },
    # Hoja de estilo global (QSS) ensamblada con la paleta/tamaños
    "qss": {}
}

THEME["qss"]["base"] = f"""
* {{
    font-family: {THEME['fonts']['family']};
    color: {THEME['colors']['text']};
    font-size: {THEME['sizes']['font_base']}px;
}}
QMainWindow, QWidget {{
    background-color: {THEME['colors']['bg']};
}}
/* Tarjetas/containers */
.QFrame#Card {{
    background-color: {THEME['colors']['bg_card']};
    border: 1px solid rgba(255,255,255,0.04);
    border-radius: {THEME['sizes']['radius_md']}px;
}}
/* Títulos */
QLabel#H1 {{
    font-size: {THEME['sizes']['font_h1']}px;
    font-weight: 700;
    color: {THEME['colors']['text']};
}}
QLabel#Muted {{
    color: {THEME['colors']['text_muted']};
}}
/* Vistas previas */
QLabel#Preview {{
    background-color: {THEME['colors']['preview_bg']};
    border: 1px solid {THEME['colors']['preview_border']};
    border-radius: {THEME['sizes']['radius_sm']}px;
}}
/* Botón de grabación */
QPushButton#PrimaryButton {{
    background-color: {THEME['colors']['primary']};
    border: none;
    border-radius: {THEME['sizes']['radius_sm']}px;
    height: {THEME['sizes']['btn_height']}px;
    font-size: {THEME['sizes']['font_button']}px;
    font-weight: 600;
    padding: 0 16px;
}}
QPushButton#PrimaryButton:hover {{
    background-color: {THEME['colors']['primary_hover']};
}}
QPushButton#PrimaryButton:pressed {{
    background-color: {THEME['colors']['primary_pressed']};
}}
QPushButton#DangerButton {{
    background-color: {THEME['colors']['danger']};
    border: none;
    border-radius: {THEME['sizes']['radius_sm']}px;
    height: {THEME['sizes']['btn_height']}px;
    font-size: {THEME['sizes']['font_button']}px;
    font-weight: 600;
    padding: 0 16px;
}}
QPushButton#DangerButton:hover {{
    background-color: {THEME['colors']['danger_hover']};
}}
/* Etiquetas de feedback */
QLabel#Error {{
    color: {THEME['colors']['danger']};
    font-weight: 600;
}}
QLabel#Success {{
    color: {THEME['colors']['success']};
    font-weight: 600;
}}
"""
