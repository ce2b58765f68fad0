from __future__ import annotations

import sys
from pathlib import Path

from PySide6 import QtCore, QtGui, QtWidgets

from photo_beautify.export import EXPORT_FILENAME
from photo_beautify.loader import ACCEPTED_SUFFIXES, DecodeError
from photo_beautify.log import get_logger
from photo_beautify.params import PARAM_RANGES
from photo_beautify.raster import RasterBuffer
from photo_beautify.state import AppState
from photo_beautify.theme import apply_soft_theme

logger = get_logger()

SLIDER_LABELS = {
    "smooth": "Smooth Skin",
    "whiten": "Whiten",
    "brightness": "Brightness",
    "contrast": "Contrast",
    "saturation": "Saturation",
}


def raster_to_qimage(buffer: RasterBuffer) -> QtGui.QImage:
    h, w = buffer.height, buffer.width
    bytes_per_line = 4 * w
    # Detach from the NumPy buffer lifecycle (QImage may otherwise reference freed memory).
    qimg = QtGui.QImage(buffer.pixels.tobytes(), w, h, bytes_per_line, QtGui.QImage.Format.Format_RGBA8888)
    return qimg.copy()


def _dropped_image_path(mime: QtCore.QMimeData) -> Path | None:
    if not mime.hasUrls():
        return None
    for url in mime.urls():
        if not url.isLocalFile():
            continue
        path = Path(url.toLocalFile())
        if path.suffix.lower() in ACCEPTED_SUFFIXES:
            return path
    return None


class _UploadArea(QtWidgets.QFrame):
    clicked = QtCore.Signal()
    fileDropped = QtCore.Signal(object)  # Path

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("UploadArea")
        self.setAcceptDrops(True)
        self.setCursor(QtCore.Qt.CursorShape.PointingHandCursor)
        self.setMinimumSize(520, 320)

        lay = QtWidgets.QVBoxLayout(self)
        lay.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        title = QtWidgets.QLabel("Drop a photo here")
        title.setObjectName("Title")
        title.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        hint = QtWidgets.QLabel("or click to choose a file (PNG, JPEG, GIF, WebP)")
        hint.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        lay.addWidget(title)
        lay.addWidget(hint)

    def _set_drag_active(self, active: bool) -> None:
        self.setProperty("dragActive", active)
        # Re-polish so the dynamic property selector takes effect.
        self.style().unpolish(self)
        self.style().polish(self)

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)

    def dragEnterEvent(self, event: QtGui.QDragEnterEvent) -> None:
        if _dropped_image_path(event.mimeData()) is not None:
            self._set_drag_active(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QtGui.QDragLeaveEvent) -> None:
        self._set_drag_active(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QtGui.QDropEvent) -> None:
        self._set_drag_active(False)
        path = _dropped_image_path(event.mimeData())
        if path is None:
            event.ignore()
            return
        event.acceptProposedAction()
        self.fileDropped.emit(path)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Photo Beautify")

        self._state = AppState()
        self._base_pixmap: QtGui.QPixmap | None = None
        self._sliders: dict[str, QtWidgets.QSlider] = {}
        self._value_labels: dict[str, QtWidgets.QLabel] = {}

        self._stack = QtWidgets.QStackedWidget()
        self.setCentralWidget(self._stack)

        # Upload page
        upload_page = QtWidgets.QWidget()
        upload_layout = QtWidgets.QVBoxLayout(upload_page)
        upload_layout.setContentsMargins(40, 40, 40, 40)
        self.upload_area = _UploadArea()
        upload_layout.addWidget(self.upload_area, 1)
        self._stack.addWidget(upload_page)

        # Edit page: preview + controls column
        edit_page = QtWidgets.QWidget()
        edit_layout = QtWidgets.QHBoxLayout(edit_page)
        edit_layout.setSpacing(16)

        self.image_label = QtWidgets.QLabel()
        self.image_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        self.image_label.setMinimumSize(480, 360)

        self.scroll = QtWidgets.QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setWidget(self.image_label)
        edit_layout.addWidget(self.scroll, 1)

        controls = QtWidgets.QWidget()
        controls.setMinimumWidth(300)
        controls.setMaximumWidth(380)
        controls_layout = QtWidgets.QVBoxLayout(controls)
        controls_layout.setContentsMargins(0, 0, 0, 0)
        controls_layout.setSpacing(10)

        heading = QtWidgets.QLabel("Adjustments")
        heading.setObjectName("Title")
        controls_layout.addWidget(heading)

        for name, (min_v, max_v, default) in PARAM_RANGES.items():
            slider, value_label = self._make_slider(min_v, max_v, default)
            slider.valueChanged.connect(lambda v, n=name: self._on_param_change(n, v))
            self._sliders[name] = slider
            self._value_labels[name] = value_label
            controls_layout.addWidget(QtWidgets.QLabel(SLIDER_LABELS.get(name, name.title())))
            controls_layout.addWidget(self._hbox(slider, value_label))

        controls_layout.addStretch(1)

        self.reset_btn = QtWidgets.QPushButton("Reset")
        self.reset_btn.setObjectName("SecondaryButton")
        self.new_btn = QtWidgets.QPushButton("New Image…")
        self.new_btn.setObjectName("SecondaryButton")
        self.download_btn = QtWidgets.QPushButton("Download")
        controls_layout.addWidget(self.reset_btn)
        controls_layout.addWidget(self.new_btn)
        controls_layout.addWidget(self.download_btn)

        edit_layout.addWidget(controls)
        self._stack.addWidget(edit_page)

        self.setStatusBar(QtWidgets.QStatusBar())

        self.upload_area.clicked.connect(self._on_load)
        self.upload_area.fileDropped.connect(self._load_path)
        self.reset_btn.clicked.connect(self._on_reset)
        self.new_btn.clicked.connect(self._on_load)
        self.download_btn.clicked.connect(self._on_download)

        self._show_upload()

    def _on_load(self) -> None:
        patterns = " ".join(f"*{s}" for s in ACCEPTED_SUFFIXES)
        fn, _ = QtWidgets.QFileDialog.getOpenFileName(
            self,
            "Open Image",
            str(Path.home()),
            f"Images ({patterns});;All Files (*)",
        )
        if not fn:
            return
        self._load_path(Path(fn))

    def _load_path(self, path: Path) -> None:
        try:
            data = path.read_bytes()
            self._state.load(data, source=path)
        except (DecodeError, OSError) as e:
            # Stay on whichever page is showing; the user can pick another file.
            logger.warning("Failed to open %s: %s", path, e)
            self.statusBar().showMessage(f"Could not open {path.name}: not a supported image", 5000)
            return

        original = self._state.original
        self.statusBar().showMessage(f"{path.name}: {original.width}x{original.height}", 5000)
        self._stack.setCurrentIndex(1)
        self._show_rendered()

    def _on_download(self) -> None:
        if not self._state.has_image:
            return

        start_dir = self._state.source.parent if self._state.source else Path.home()
        fn, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            "Save Image As",
            str(start_dir / EXPORT_FILENAME),
            "PNG (*.png)",
        )
        if not fn:
            return

        try:
            out_path = self._state.export(fn)
        except OSError as e:
            logger.error("Export to %s failed: %s", fn, e)
            QtWidgets.QMessageBox.critical(self, "Export Error", str(e))
            return
        self.statusBar().showMessage(f"Saved {out_path}", 5000)

    def _on_reset(self) -> None:
        self._state.reset()
        self._sync_sliders_from_state()
        self._show_rendered()

    def _on_param_change(self, name: str, value: int) -> None:
        self._value_labels[name].setText(str(value))
        self._state.set_param(name, value)
        self._show_rendered()

    def _sync_sliders_from_state(self) -> None:
        params = self._state.params.to_dict()
        for name, slider in self._sliders.items():
            # Avoid one render per slider; the caller renders once afterwards.
            slider.blockSignals(True)
            slider.setValue(params[name])
            slider.blockSignals(False)
            self._value_labels[name].setText(str(params[name]))

    def _show_upload(self) -> None:
        self._stack.setCurrentIndex(0)
        self._sync_sliders_from_state()

    def _show_rendered(self) -> None:
        rendered = self._state.rendered
        if rendered is None:
            self.image_label.setPixmap(QtGui.QPixmap())
            self._base_pixmap = None
            return
        self._base_pixmap = QtGui.QPixmap.fromImage(raster_to_qimage(rendered))
        self._refit_pixmap()

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        super().resizeEvent(event)
        self._refit_pixmap()

    def _make_slider(self, min_v: int, max_v: int, value: int) -> tuple[QtWidgets.QSlider, QtWidgets.QLabel]:
        s = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
        s.setRange(min_v, max_v)
        s.setValue(value)
        s.setSingleStep(1)
        lab = QtWidgets.QLabel(str(value))
        lab.setObjectName("ValueLabel")
        lab.setMinimumWidth(40)
        lab.setAlignment(QtCore.Qt.AlignmentFlag.AlignRight | QtCore.Qt.AlignmentFlag.AlignVCenter)
        return s, lab

    def _hbox(self, slider: QtWidgets.QSlider, label: QtWidgets.QLabel) -> QtWidgets.QWidget:
        w = QtWidgets.QWidget()
        lay = QtWidgets.QHBoxLayout(w)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(8)
        lay.addWidget(slider, 1)
        lay.addWidget(label)
        return w

    def _refit_pixmap(self) -> None:
        if not self._base_pixmap or self._base_pixmap.isNull():
            return
        viewport = self.scroll.viewport().size()
        if viewport.width() <= 10 or viewport.height() <= 10:
            return
        # Never upscale past the rendered size; the loader already capped it.
        target = self._base_pixmap.size().boundedTo(viewport)
        scaled = self._base_pixmap.scaled(
            target,
            QtCore.Qt.AspectRatioMode.KeepAspectRatio,
            QtCore.Qt.TransformationMode.SmoothTransformation,
        )
        self.image_label.setPixmap(scaled)


def main() -> int:
    app = QtWidgets.QApplication(sys.argv)

    apply_soft_theme(app)

    w = MainWindow()
    w.resize(1200, 800)
    w.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
