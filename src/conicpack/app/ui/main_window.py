"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the sketch canvas and the
status bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (New sketch, Capture...) to the store.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QSettings
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QFileDialog, QLabel, QMainWindow, QMessageBox

from conicpack.app.application import VISIBLE_APP_NAME
from conicpack.app.state import Store
from conicpack.app.ui.sketch_canvas import SketchCanvas

logger = logging.getLogger(__name__)

SETTINGS_CAPTURE_DIR = "capture/directory"


class MainWindow(QMainWindow):
    def __init__(self, store: Store) -> None:
        super().__init__()
        self.store = store
        self.setWindowTitle(VISIBLE_APP_NAME)

        saved_dir = QSettings().value(SETTINGS_CAPTURE_DIR, "", type=str)
        if saved_dir:
            self.store.capture.directory = saved_dir

        # --- CENTRAL: fixed-size sketch canvas ---
        self.canvas = SketchCanvas(self.store, self)
        self.setCentralWidget(self.canvas)

        # --- STATUS BAR ---
        self.lbl_circles = QLabel()
        self.lbl_cursor = QLabel()
        self.statusBar().addPermanentWidget(self.lbl_circles)
        self.statusBar().addPermanentWidget(self.lbl_cursor)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- SIGNAL CONNECTIONS ---
        self.store.circles_changed.connect(self.on_circles_changed)
        self.store.cursor_changed.connect(self.on_cursor_changed)
        self.store.capture_written.connect(self.on_capture_written)
        self.store.capture_failed.connect(self.on_capture_failed)
        self.canvas.paused_changed.connect(self.on_paused_changed)

        cursor = self.store.sketch.state.cursor
        self.on_circles_changed(len(self.store.sketch.state.circles))
        self.on_cursor_changed(cursor.position, cursor.step)

        self.adjustSize()
        self.canvas.setFocus()
        self.canvas.start()

    def _create_actions(self) -> None:
        self.act_new = QAction("New Sketch", self)
        self.act_new.setShortcut("Ctrl+N")
        self.act_new.triggered.connect(self.on_new_sketch)

        self.act_capture = QAction("Capture SVG", self)
        self.act_capture.setShortcut("Ctrl+S")
        self.act_capture.triggered.connect(self.on_capture)

        self.act_capture_dir = QAction("Capture Folder...", self)
        self.act_capture_dir.triggered.connect(self.on_choose_capture_dir)

        self.act_pause = QAction("Pause", self)
        self.act_pause.setCheckable(True)
        self.act_pause.triggered.connect(self.canvas.toggle_pause)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_capture)
        file_menu.addAction(self.act_capture_dir)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        sketch_menu = menu_bar.addMenu("&Sketch")
        sketch_menu.addAction(self.act_pause)

    # --- SLOTS ---

    def on_new_sketch(self) -> None:
        self.store.new_sketch()
        self.canvas.update()

    def on_capture(self) -> None:
        self.store.queue_capture()
        self.canvas.flush_input()

    def on_choose_capture_dir(self) -> None:
        directory = QFileDialog.getExistingDirectory(self, "Capture Folder", self.store.capture.directory)
        if not directory:
            return
        self.store.capture.directory = directory
        QSettings().setValue(SETTINGS_CAPTURE_DIR, directory)
        logger.info(f"Capture folder set to: {directory}")

    def on_circles_changed(self, count: int) -> None:
        self.lbl_circles.setText(f"Circles: {count}/{self.store.sketch.config.max_circles}")

    def on_cursor_changed(self, position: float, step: float) -> None:
        self.lbl_cursor.setText(f"Noise start: {position:.3f}  step: {step:.3f}")

    def on_capture_written(self, path: str) -> None:
        self.statusBar().showMessage(f"Saved {path}", 5000)

    def on_capture_failed(self, message: str) -> None:
        QMessageBox.warning(self, "Capture failed", message)

    def on_paused_changed(self, paused: bool) -> None:
        self.act_pause.setChecked(paused)
