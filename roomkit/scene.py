from __future__ import annotations
import math
from typing import Dict, Optional

from PySide6.QtCore import Qt, QRectF, QPointF, Signal
from PySide6.QtGui import QPainter, QPen, QBrush, QColor, QTransform, QWheelEvent
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView, QGraphicsRectItem, QGraphicsItem, QApplication

from .catalog import FOOTPRINTS, spec_for
from .editor import RoomEditor
from .models import Surface, Vec3
from .utils import (PX_PER_M, WALL_BAND_PX, BG_COLOR, GRID_MAJOR, GRID_MINOR, MAJOR_EVERY, THEMES,
                    WALL_BORDER, ITEM_COLOR, ITEM_BORDER, WALL_ITEM_COLOR, SUPPORT_COLOR)


def to_scene(x: float, z: float) -> QPointF:
    return QPointF(x * PX_PER_M, z * PX_PER_M)


def from_scene(p: QPointF):
    return p.x() / PX_PER_M, p.y() / PX_PER_M


class ItemGraphic(QGraphicsRectItem):
    """Top-down footprint of one placed item; knows only the item id."""

    def __init__(self, item_id: str, item_type: str):
        w, d = FOOTPRINTS.get(item_type, (0.4, 0.4))
        super().__init__(QRectF(-w * PX_PER_M / 2, -d * PX_PER_M / 2, w * PX_PER_M, d * PX_PER_M))
        self.item_id = item_id
        self.item_type = item_type
        spec = spec_for(item_type)
        color = WALL_ITEM_COLOR if spec.is_wall else (SUPPORT_COLOR if spec.is_support else ITEM_COLOR)
        self.brush_normal = QBrush(color)
        self.pen_normal = QPen(ITEM_BORDER, 1, Qt.SolidLine)
        self.pen_selected = QPen(QColor(255, 140, 0), 2, Qt.DashLine)
        self.setBrush(self.brush_normal)
        self.setPen(self.pen_normal)
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setFlag(QGraphicsItem.ItemIsMovable, False)   # the editor moves items, not Qt
        self.setToolTip(item_type)

    def apply(self, x: float, y: float, z: float, rotation_y: float, scale: float, selected: bool):
        self.setPos(to_scene(x, z))
        # yaw about +y turns counterclockwise seen from above; Qt rotates clockwise
        self.setRotation(-math.degrees(rotation_y))
        self.setScale(scale)
        self.setZValue(10 + y)   # things on top of supports draw above them
        self.setPen(self.pen_selected if selected else self.pen_normal)


class PlanScene(QGraphicsScene):
    def __init__(self, editor: RoomEditor, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.editor = editor
        self.setItemIndexMethod(QGraphicsScene.NoIndex)
        r = editor.room
        self.setSceneRect(QRectF(to_scene(-r.pan_x, -r.pan_z), to_scene(r.pan_x, r.pan_z)))
        self._graphics: Dict[str, ItemGraphic] = {}
        self._grab_y = 0.0

    # ---- editor -> scene ----
    def sync(self):
        ed = self.editor
        live = set(ed.items.ids())
        for item_id in list(self._graphics):
            if item_id not in live:
                self.removeItem(self._graphics.pop(item_id))
        for it in ed.items:
            g = self._graphics.get(it.id)
            if g is None:
                g = self._graphics[it.id] = ItemGraphic(it.id, it.type)
                self.addItem(g)
            shown = ed.rendered.get(it.id)
            pos, rot, scale = (shown.position, shown.rotation_y, shown.scale) if shown else \
                (it.position, it.rotation_y, it.scale)
            g.apply(*pos, rot, scale, it.id == ed.selected_id)
        self.update()

    def graphic_for(self, item_id: str) -> Optional[ItemGraphic]:
        return self._graphics.get(item_id)

    # ---- scene -> editor ----
    def surface_hits(self, scene_pos: QPointF) -> Dict[str, Vec3]:
        """The pointer seen on each tracked surface, in room coordinates.

        The plan view cannot show height, so wall hits keep the height the
        drag was grabbed at.
        """
        x, z = from_scene(scene_pos)
        r, y = self.editor.room, self._grab_y
        return {
            Surface.FLOOR: (x, 0.0, z),
            Surface.BACK: (x, y, r.back_front_z),
            Surface.LEFT: (r.left_front_x, y, z),
        }

    def item_id_at(self, scene_pos: QPointF) -> Optional[str]:
        for g in self.items(scene_pos):
            if isinstance(g, ItemGraphic):
                return g.item_id
        return None

    def press_at(self, scene_pos: QPointF) -> Optional[str]:
        ed = self.editor
        item_id = self.item_id_at(scene_pos)
        it = ed.items.get(item_id)
        if it is None:
            ed.pointer_missed()
            self.sync()
            return None
        self._grab_y = it.y
        kind = ed.placement.domain_for(it).kind
        ed.pointer_down(item_id, self.surface_hits(scene_pos)[kind])
        self.sync()
        return item_id

    def move_to(self, scene_pos: QPointF):
        if not self.editor.drag.active:
            return
        # report every surface; the session keeps only the one it was armed on
        for surface, hit in self.surface_hits(scene_pos).items():
            self.editor.pointer_move(surface, hit)
        self.sync()

    def release(self):
        self.editor.pointer_up()
        self.sync()

    def _view_panning(self) -> bool:
        return any(v.dragMode() == QGraphicsView.ScrollHandDrag for v in self.views())

    def mousePressEvent(self, event):
        # while a view hand-drags, the press is left unaccepted so the view gets it
        if event.button() == Qt.LeftButton and not self._view_panning():
            self.press_at(event.scenePos())
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        self.move_to(event.scenePos())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        # a release must always reach the editor, whichever button and wherever it lands
        self.release()
        super().mouseReleaseEvent(event)

    # ---- painting ----
    def drawBackground(self, painter: QPainter, rect: QRectF):
        painter.fillRect(rect, BG_COLOR)
        ed = self.editor
        r = ed.room
        _, floor_hex, wall_hex = THEMES[ed.theme_idx]
        floor = QRectF(to_scene(-r.half_x, -r.half_z), to_scene(r.half_x, r.half_z))
        painter.fillRect(floor, QColor(floor_hex))

        step = ed.steps.grid * PX_PER_M
        i = 0
        x = floor.left()
        while x <= floor.right() + 0.5:
            major = i % MAJOR_EVERY == 0
            painter.setPen(QPen(GRID_MAJOR if major else GRID_MINOR, 1.5 if major else 1))
            painter.drawLine(QPointF(x, floor.top()), QPointF(x, floor.bottom()))
            x += step; i += 1
        j = 0
        y = floor.top()
        while y <= floor.bottom() + 0.5:
            major = j % MAJOR_EVERY == 0
            painter.setPen(QPen(GRID_MAJOR if major else GRID_MINOR, 1.5 if major else 1))
            painter.drawLine(QPointF(floor.left(), y), QPointF(floor.right(), y))
            y += step; j += 1

        # back wall along the top edge, left wall along the left edge
        painter.setPen(QPen(WALL_BORDER, 1))
        painter.setBrush(QColor(wall_hex))
        painter.drawRect(QRectF(floor.left() - WALL_BAND_PX, floor.top() - WALL_BAND_PX,
                                floor.width() + WALL_BAND_PX, WALL_BAND_PX))
        painter.drawRect(QRectF(floor.left() - WALL_BAND_PX, floor.top(),
                                WALL_BAND_PX, floor.height()))


class PlanView(QGraphicsView):
    scaleChanged = Signal(float)

    def __init__(self, scene: PlanScene):
        super().__init__(scene)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setViewportUpdateMode(QGraphicsView.BoundingRectViewportUpdate)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorViewCenter)
        self._space_down = False
        self.apply_zoom()

    @property
    def editor(self) -> RoomEditor:
        return self.scene().editor

    def apply_zoom(self):
        k = self.editor.camera.zoom / 120.0
        self.setTransform(QTransform.fromScale(k, k))
        self.scaleChanged.emit(k)

    def wheelEvent(self, event: QWheelEvent):
        if QApplication.keyboardModifiers() & Qt.ControlModifier:
            self.editor.zoom_by(1 if event.angleDelta().y() > 0 else -1)
            self.apply_zoom()
            event.accept()
            return
        super().wheelEvent(event)

    def keyPressEvent(self, event):
        # space-drag pans, but never while an item is being dragged
        if event.key() == Qt.Key_Space and not self._space_down and self.editor.pan_enabled:
            self._space_down = True
            self.setDragMode(QGraphicsView.ScrollHandDrag)
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key_Space and self._space_down:
            self._space_down = False
            self.setDragMode(QGraphicsView.NoDrag)
            event.accept()
            return
        super().keyReleaseEvent(event)

    def scrollContentsBy(self, dx: int, dy: int):
        super().scrollContentsBy(dx, dy)
        # the visible centre is the camera's look-target
        cam = self.editor.camera
        cx, cz = from_scene(self.mapToScene(self.viewport().rect().center()))
        tx, _, tz = cam.target
        cam.pan_by(cx - tx, cz - tz)

    def follow_camera(self):
        tx, _, tz = self.editor.camera.target
        cx, cz = from_scene(self.mapToScene(self.viewport().rect().center()))
        if abs(cx - tx) > 1e-3 or abs(cz - tz) > 1e-3:
            self.centerOn(to_scene(tx, tz))
