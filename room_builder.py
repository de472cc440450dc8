#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations
import sys, json, os, logging, time
from PySide6.QtCore import Qt, QTimer, QSizeF
from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QToolBar, QStatusBar, QFileDialog, QMessageBox, QToolButton, QMenu, QWidgetAction
)
from roomkit import RoomEditor, PRESETS, CATALOG, Direction, WallSide
from roomkit.config import load_preset_name, save_preset_name
from roomkit.scene import PlanScene, PlanView
from roomkit.utils import THEMES

log = logging.getLogger("room_builder")

FRAME_MS = 16


def _ensure_ext(path: str, ext: str) -> str:
    return path if path.lower().endswith(ext) else path + ext


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Room Builder")
        self.resize(1280, 860)

        self.editor = RoomEditor(preset_name=load_preset_name(), status_cb=self._status,
                                 on_change=self._on_items_changed)
        self.scene = PlanScene(self.editor)
        self.view = PlanView(self.scene)
        self.setCentralWidget(self.view)

        self._build_toolbar()
        self.setStatusBar(QStatusBar(self))
        self.view.scaleChanged.connect(lambda _: self._update_status())

        # frame loop: drag sanity, pan clamp, smoothing
        self._last = time.monotonic()
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._frame)
        self._timer.start(FRAME_MS)
        self._update_status()

    # ---------- toolbar ----------
    def _build_toolbar(self):
        tb = QToolBar("Panel", self)
        tb.setMovable(False)
        tb.setIconSize(QSizeF(18, 18).toSize())
        tb.setToolButtonStyle(Qt.ToolButtonTextOnly)
        self.addToolBar(Qt.TopToolBarArea, tb)

        def add_menu_button(title: str, builder):
            btn = QToolButton(self)
            btn.setText(title)
            btn.setPopupMode(QToolButton.InstantPopup)
            m = QMenu(btn); builder(m)
            btn.setMenu(m)
            wa = QWidgetAction(self); wa.setDefaultWidget(btn)
            tb.addAction(wa)

        # Step/Grid presets
        self.preset_group = QActionGroup(self)
        for name in PRESETS:
            act = QAction(name.capitalize(), self, checkable=True)
            act.setChecked(name == self.editor.preset_name)
            act.triggered.connect(lambda _=False, n=name: self._set_preset(n))
            self.preset_group.addAction(act)
            tb.addAction(act)
        tb.addSeparator()

        def build_add_menu(m: QMenu):
            for kind in CATALOG:
                act = m.addAction(kind)
                act.triggered.connect(lambda _=False, k=kind: self._add(k))
        add_menu_button("Add", build_add_menu)

        def build_project_menu(m: QMenu):
            a = m.addAction("Open…"); a.setShortcut(QKeySequence("Ctrl+O")); a.triggered.connect(self._open_dialog)
            a = m.addAction("Save…"); a.setShortcut(QKeySequence("Ctrl+S")); a.triggered.connect(self._save_dialog)
        add_menu_button("Project", build_project_menu)

        def build_theme_menu(m: QMenu):
            for i, (name, _floor, _wall) in enumerate(THEMES):
                a = m.addAction(name)
                a.triggered.connect(lambda _=False, idx=i: (self.editor.set_theme(idx), self.scene.update()))
        add_menu_button("Theme", build_theme_menu)

        def build_wall_menu(m: QMenu):
            for side in WallSide.ALL:
                a = m.addAction(side.capitalize())
                a.triggered.connect(lambda _=False, s=side: self.editor.set_wall(s))
        add_menu_button("Wall", build_wall_menu)
        tb.addSeparator()

        # nudge / rotate / scale pads
        shortcuts = [
            ("←", Qt.Key_Left, lambda: self.editor.move_dir(Direction.LEFT)),
            ("→", Qt.Key_Right, lambda: self.editor.move_dir(Direction.RIGHT)),
            ("↑", Qt.Key_Up, lambda: self.editor.move_dir(Direction.UP)),
            ("↓", Qt.Key_Down, lambda: self.editor.move_dir(Direction.DOWN)),
            ("⟳", Qt.Key_E, lambda: self.editor.rotate_by(+1)),
            ("⟲", Qt.Key_Q, lambda: self.editor.rotate_by(-1)),
            ("－", Qt.Key_Minus, lambda: self.editor.scale_by(-1)),
            ("＋", Qt.Key_Plus, lambda: self.editor.scale_by(+1)),
        ]
        for text, key, fn in shortcuts:
            act = QAction(text, self)
            act.setShortcut(QKeySequence(key))
            act.triggered.connect(fn)
            tb.addAction(act)
        tb.addSeparator()

        self.act_delete = QAction("Delete", self)
        self.act_delete.setShortcut(QKeySequence.Delete)
        self.act_delete.triggered.connect(self.editor.remove_selected)
        tb.addAction(self.act_delete)

        self.act_clear = QAction("Clear All", self)
        self.act_clear.triggered.connect(self.editor.clear_all)
        tb.addAction(self.act_clear)

        self.act_zoom_in = QAction("Zoom +", self)
        self.act_zoom_in.setShortcut(QKeySequence.ZoomIn)
        self.act_zoom_in.triggered.connect(lambda: (self.editor.zoom_by(+1), self.view.apply_zoom()))
        self.act_zoom_out = QAction("Zoom -", self)
        self.act_zoom_out.setShortcut(QKeySequence.ZoomOut)
        self.act_zoom_out.triggered.connect(lambda: (self.editor.zoom_by(-1), self.view.apply_zoom()))
        tb.addAction(self.act_zoom_out)
        tb.addAction(self.act_zoom_in)

    # ---------- actions ----------
    def _set_preset(self, name: str):
        self.editor.set_preset(name)
        save_preset_name(name)
        self.scene.update()
        self._update_status()

    def _add(self, kind: str):
        item = self.editor.add_item(kind)
        self._status(f"Added: {item.type}")

    def _open_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open room", "", "JSON (*.json)")
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.editor.load(data)
            self.view.apply_zoom()
            self._status(f"Opened: {os.path.basename(path)}")
        except (OSError, ValueError) as e:
            log.warning("open %s failed: %s", path, e)
            QMessageBox.critical(self, "Open failed", str(e))

    def _save_dialog(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save room", "room-save.json", "JSON (*.json)")
        if not path:
            return
        path = _ensure_ext(path, ".json")
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.editor.save(), f, ensure_ascii=False, indent=2)
            self._status(f"Saved: {os.path.basename(path)}")
        except OSError as e:
            log.warning("save %s failed: %s", path, e)
            QMessageBox.critical(self, "Save failed", str(e))

    # ---------- loop / status ----------
    def _frame(self):
        now = time.monotonic()
        dt, self._last = now - self._last, now
        self.editor.tick(dt)
        self.view.follow_camera()
        self.scene.sync()

    def _on_items_changed(self):
        self.scene.sync()
        self._update_status()

    def _status(self, text: str):
        self.statusBar().showMessage(text, 3000)

    def _update_status(self):
        ed = self.editor
        sel = ed.selected
        self.statusBar().showMessage(
            f"Step/Grid: {ed.preset_name} | Items: {len(ed.items)} | "
            f"Zoom: {int(ed.camera.zoom)} | Selected: {sel.type if sel else '-'}"
        )


def main():
    logging.basicConfig(level=os.environ.get("ROOM_BUILDER_LOG", "INFO"),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
