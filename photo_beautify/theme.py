from __future__ import annotations

from PySide6 import QtGui, QtWidgets

ACCENT = "#667eea"
ACCENT_DEEP = "#764ba2"


def apply_soft_theme(app: QtWidgets.QApplication) -> None:
    """Apply a light Fusion theme with violet accents.

    Only palette + QSS; the upload drop area is styled through its object name.
    """

    app.setStyle("Fusion")

    pal = QtGui.QPalette()

    pal.setColor(QtGui.QPalette.ColorRole.Window, QtGui.QColor(246, 245, 251))
    pal.setColor(QtGui.QPalette.ColorRole.Base, QtGui.QColor(255, 255, 255))
    pal.setColor(QtGui.QPalette.ColorRole.AlternateBase, QtGui.QColor(238, 236, 248))

    pal.setColor(QtGui.QPalette.ColorRole.WindowText, QtGui.QColor(51, 51, 68))
    pal.setColor(QtGui.QPalette.ColorRole.Text, QtGui.QColor(51, 51, 68))
    pal.setColor(QtGui.QPalette.ColorRole.ButtonText, QtGui.QColor(255, 255, 255))
    pal.setColor(QtGui.QPalette.ColorRole.Button, QtGui.QColor(ACCENT))

    pal.setColor(QtGui.QPalette.ColorRole.Highlight, QtGui.QColor(ACCENT_DEEP))
    pal.setColor(QtGui.QPalette.ColorRole.HighlightedText, QtGui.QColor(255, 255, 255))

    app.setPalette(pal)

    app.setStyleSheet(
        f"""
        QWidget {{ background: #f6f5fb; color: #333344; }}
        QLabel {{ background: transparent; }}
        QLabel#Title {{ font-size: 20px; font-weight: 600; color: {ACCENT_DEEP}; }}
        QLabel#ValueLabel {{ color: {ACCENT}; font-weight: 600; }}

        /* Upload drop target */
        QFrame#UploadArea {{
            background: #ffffff;
            border: 3px dashed {ACCENT};
            border-radius: 14px;
        }}
        QFrame#UploadArea[dragActive="true"] {{ border-color: {ACCENT_DEEP}; background: #f1edfa; }}

        QPushButton {{
            background: {ACCENT};
            color: #ffffff;
            border: none;
            border-radius: 6px;
            padding: 7px 14px;
            font-weight: 600;
        }}
        QPushButton:hover {{ background: {ACCENT_DEEP}; }}
        QPushButton:disabled {{ background: #c9c6d8; color: #f4f4f4; }}
        QPushButton#SecondaryButton {{ background: #e4e1f2; color: {ACCENT_DEEP}; }}
        QPushButton#SecondaryButton:hover {{ background: #d7d2ee; }}

        QSlider::groove:horizontal {{ height: 6px; background: #dddaf0; border-radius: 3px; }}
        QSlider::sub-page:horizontal {{ background: {ACCENT}; border-radius: 3px; }}
        QSlider::handle:horizontal {{
            width: 16px;
            margin: -6px 0;
            border-radius: 8px;
            background: {ACCENT_DEEP};
        }}

        QScrollArea {{ border: 1px solid #e2dff0; border-radius: 8px; background: #ffffff; }}
        QStatusBar {{ color: #6b6880; }}
        QMessageBox {{ background: #f6f5fb; }}
        """
    )
