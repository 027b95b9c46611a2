"""
Estilos visuales de la aplicación Orbimol.

Define la paleta del visor y las hojas de estilo Qt para la ventana
principal, la barra de controles y el panel de información.
"""

# ============================================================================
# Paleta de colores
# ============================================================================

# Colores principales
PRIMARY_DARK = "#1E2A36"        # Header background
ACCENT_PRIMARY = "#00BCD4"      # Cyan accent
ACCENT_PRESSED = "#00ACC1"      # Darker cyan for pressed

# Colores de fondo
BG_MAIN = "#ECEFF1"             # Window background
BG_TOOLBAR = "#F5F7FA"          # Toolbar background
BG_VIEWPORT = "#263238"         # 3D viewport background
BG_OVERLAY = "rgba(255, 255, 255, 210)"

# Colores de bordes
BORDER_LIGHT = "#E0E4E8"
BORDER_MEDIUM = "#CFD8DC"

# Colores de texto
TEXT_PRIMARY = "#212121"
TEXT_MUTED = "#78909C"
TEXT_INVERSE = "#FFFFFF"

# Colores de dibujo sobre el visor
LABEL_BG = "#80000000"          # ARGB: black at 50%
INFO_BG = "#B3000000"           # ARGB: black at 70%
BADGE_BG = "#CCFFFFFF"
BADGE_BORDER = "#B0BEC5"

# ============================================================================
# Hoja de estilos principal
# ============================================================================

MAIN_STYLESHEET = f"""
QMainWindow {{
    background-color: {BG_MAIN};
}}

QMenuBar {{
    background-color: {PRIMARY_DARK};
    color: {TEXT_INVERSE};
    padding: 4px 8px;
    font-size: 13px;
}}

QMenuBar::item:selected {{
    background-color: {ACCENT_PRIMARY};
    border-radius: 4px;
}}

QToolBar {{
    background-color: {BG_TOOLBAR};
    border: none;
    border-bottom: 1px solid {BORDER_LIGHT};
    spacing: 6px;
    padding: 6px 8px;
}}

QToolButton {{
    background-color: transparent;
    border: 1px solid transparent;
    border-radius: 6px;
    padding: 4px 8px;
    color: {TEXT_PRIMARY};
}}

QToolButton:checked {{
    background-color: #B2EBF2;
    border: 1px solid {ACCENT_PRIMARY};
}}

QToolButton:pressed {{
    background-color: {BORDER_LIGHT};
}}

QLineEdit {{
    border: 1px solid {BORDER_MEDIUM};
    border-radius: 4px;
    padding: 4px 6px;
    font-family: monospace;
}}

QDockWidget::title {{
    background: {BG_TOOLBAR};
    padding: 8px 12px;
    border-bottom: 1px solid {BORDER_LIGHT};
}}

QStatusBar {{
    color: {TEXT_MUTED};
}}
"""
